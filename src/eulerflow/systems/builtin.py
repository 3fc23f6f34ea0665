# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Built-in Derivative Functions

Ready-made right-hand sides f(x, y) for dy/dx = f(x, y). All are plain
module-level functions, so they can be shipped to a process pool.

Available
---------
cbrt_plus_x : dy/dx = cbrt(y) + x   (reference equation)
linear_decay : dy/dx = -y
logistic : dy/dx = y (1 - y)
unit_slope : dy/dx = 1
zero : dy/dx = 0

Usage
-----
>>> from eulerflow.systems import get_derivative
>>> f = get_derivative("cbrt_plus_x")
>>> f(1.0, 8.0)
3.0
"""

from typing import Dict, List

import numpy as np

from eulerflow.exceptions import ConfigurationError
from eulerflow.types.core import DerivativeFunction


def cbrt_plus_x(x: float, y: float) -> float:
    """dy/dx = cbrt(y) + x, with the real cube root for negative y."""
    return float(np.cbrt(y) + x)


def linear_decay(x: float, y: float) -> float:
    """dy/dx = -y"""
    return -y


def logistic(x: float, y: float) -> float:
    """dy/dx = y (1 - y)"""
    return y * (1.0 - y)


def unit_slope(x: float, y: float) -> float:
    """dy/dx = 1"""
    return 1.0


def zero(x: float, y: float) -> float:
    """dy/dx = 0"""
    return 0.0


DERIVATIVES: Dict[str, DerivativeFunction] = {
    "cbrt_plus_x": cbrt_plus_x,
    "linear_decay": linear_decay,
    "logistic": logistic,
    "unit_slope": unit_slope,
    "zero": zero,
}


def list_derivatives() -> List[str]:
    """Names accepted by get_derivative()."""
    return sorted(DERIVATIVES)


def get_derivative(name: str) -> DerivativeFunction:
    """
    Look up a built-in derivative by name.

    Raises
    ------
    ConfigurationError
        If name is not registered
    """
    key = name.lower().replace("-", "_").replace(" ", "_")
    if key not in DERIVATIVES:
        raise ConfigurationError(
            f"Unknown derivative '{name}'. Available: {', '.join(list_derivatives())}"
        )
    return DERIVATIVES[key]


__all__ = [
    "DERIVATIVES",
    "cbrt_plus_x",
    "get_derivative",
    "linear_decay",
    "list_derivatives",
    "logistic",
    "unit_slope",
    "zero",
]
