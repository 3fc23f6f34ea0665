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
Core Types - Fundamental Building Blocks

Defines the basic value types used throughout eulerflow:
- Point: an (x, y) coordinate in the state space
- Trajectory: an ordered sequence of Points
- Viewport: rectangular plotting bounds
- DerivativeFunction: the right-hand side f(x, y) of dy/dx = f(x, y)

Mathematical Context
-------------------
eulerflow integrates scalar first-order ODEs

    dy/dx = f(x, y)

so the "state" is the pair (x, y) and a trajectory is the polyline traced
by repeated Euler steps from an initial condition.

Usage
-----
>>> from eulerflow.types.core import Point, Trajectory
>>>
>>> start = Point(0.0, 5.0)
>>> x, y = start
>>> trajectory: Trajectory = (start, Point(0.001, 5.0017))
"""

from typing import Callable, NamedTuple, Tuple, Union

import numpy as np

# ============================================================================
# Scalar Types
# ============================================================================

ScalarLike = Union[float, int, np.floating, np.integer]
"""
Scalar numeric value accepted wherever a float is expected.

NumPy scalars are accepted as well, since derivative functions built on
NumPy ufuncs (e.g. np.cbrt) return np.float64.
"""

DerivativeFunction = Callable[[float, float], float]
"""
Right-hand side of the scalar ODE dy/dx = f(x, y).

Any callable with signature (x, y) -> slope is accepted.

Examples
--------
>>> def f(x: float, y: float) -> float:
...     return np.cbrt(y) + x
>>>
>>> decay: DerivativeFunction = lambda x, y: -0.5 * y
"""


# ============================================================================
# Point
# ============================================================================


class Point(NamedTuple):
    """
    Coordinate pair (x, y) in the state space.

    Immutable value type: two Points with the same coordinates are equal
    and interchangeable.

    Attributes
    ----------
    x : float
        Independent variable, defaults to 0.0
    y : float
        Dependent variable, defaults to 0.0

    Examples
    --------
    >>> p = Point(1.0, 2.0)
    >>> p.x, p.y
    (1.0, 2.0)
    >>> Point()
    Point(x=0.0, y=0.0)
    """

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_tuple(cls, pair: Tuple[ScalarLike, ScalarLike]) -> "Point":
        """
        Build a Point from any (x, y) pair, coercing both to float.

        Examples
        --------
        >>> Point.from_tuple((0, 5))
        Point(x=0.0, y=5.0)
        """
        x, y = pair
        return cls(float(x), float(y))


Trajectory = Tuple[Point, ...]
"""
Ordered, finite sequence of Points produced by one integration run.

Insertion order equals generation order, and x increases by the step size
from one Point to the next. An empty tuple is a valid trajectory: it means
the initial condition already met the termination policy or was degenerate.
"""


# ============================================================================
# Viewport
# ============================================================================


class Viewport(NamedTuple):
    """
    Rectangular plotting bounds.

    Attributes
    ----------
    left : float
        Minimum x shown
    right : float
        Maximum x shown
    bottom : float
        Minimum y shown
    top : float
        Maximum y shown
    """

    left: float
    right: float
    bottom: float
    top: float

    @property
    def x_range(self) -> Tuple[float, float]:
        return (self.left, self.right)

    @property
    def y_range(self) -> Tuple[float, float]:
        return (self.bottom, self.top)


__all__ = [
    "ScalarLike",
    "DerivativeFunction",
    "Point",
    "Trajectory",
    "Viewport",
]
