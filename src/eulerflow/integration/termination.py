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
Termination Policy and Degeneracy Checks

Decides, one point at a time, whether an Euler integration should stop
before recording the current point.

Two independent mechanisms stop an integration:

- TerminationPolicy: user-configured bounds on x and |y|, plus a
  required iteration cap
- Degeneracy: a coordinate that is NaN or infinite

Usage
-----
>>> policy = TerminationPolicy(max_x=150.0, max_abs_y=150.0)
>>> policy.has_reached(Point(151.0, 0.0))
True
>>> is_degenerate(float("nan"))
True
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, List, Optional

import numpy as np

from eulerflow.exceptions import ConfigurationError, format_errors
from eulerflow.types.core import Point, ScalarLike

DEFAULT_MAX_ITERATIONS = 10_000_000


def is_degenerate(value: ScalarLike) -> bool:
    """
    True iff value is NaN or infinite.

    Finite values, including zero and subnormals, are never degenerate.

    Examples
    --------
    >>> is_degenerate(float("inf"))
    True
    >>> is_degenerate(5e-324)
    False
    """
    return not np.isfinite(value)


def is_degenerate_point(point: Point) -> bool:
    """True iff either coordinate of point is degenerate."""
    return is_degenerate(point.x) or is_degenerate(point.y)


def check_policy_bounds(max_x: Any, max_abs_y: Any, max_iterations: Any) -> List[str]:
    """Return a list of problems with a set of termination bounds (empty if valid)."""
    errors = []

    if max_x is not None:
        if isinstance(max_x, bool) or not isinstance(max_x, numbers.Real):
            errors.append(f"max_x must be a real number or None, got {max_x!r}")
        elif math.isnan(max_x):
            errors.append("max_x must not be NaN")

    if max_abs_y is not None:
        if isinstance(max_abs_y, bool) or not isinstance(max_abs_y, numbers.Real):
            errors.append(f"max_abs_y must be a real number or None, got {max_abs_y!r}")
        elif math.isnan(max_abs_y):
            errors.append("max_abs_y must not be NaN")
        elif max_abs_y < 0:
            errors.append(f"max_abs_y must be non-negative, got {max_abs_y}")

    if isinstance(max_iterations, bool) or not isinstance(max_iterations, numbers.Integral):
        errors.append(
            f"max_iterations must be an integer, got {type(max_iterations).__name__}"
        )
    elif max_iterations <= 0:
        errors.append(f"max_iterations must be positive, got {max_iterations}")

    return errors


@dataclass(frozen=True)
class TerminationPolicy:
    """
    Stopping predicate for a single trajectory.

    Parameters
    ----------
    max_x : Optional[float]
        Stop once x exceeds this value. None disables the x bound.
    max_abs_y : Optional[float]
        Stop once |y| exceeds this value. None disables the y bound.
    max_iterations : int
        Hard cap on the number of recorded points. Always present, so an
        integration terminates even when both optional bounds are None and
        the solution never overflows.

    Raises
    ------
    ConfigurationError
        If a bound is NaN, max_abs_y is negative, or max_iterations is not a
        positive integer

    Examples
    --------
    >>> policy = TerminationPolicy(max_x=3.0)
    >>> policy.has_reached(Point(3.0, 1e9))
    False
    >>> policy.has_reached(Point(4.0, 0.0))
    True
    """

    max_x: Optional[float] = None
    max_abs_y: Optional[float] = None
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self):
        errors = self.check()
        if errors:
            raise ConfigurationError(format_errors("Invalid termination policy", errors))

    def check(self) -> List[str]:
        """Return a list of problems with this policy (empty if valid)."""
        return check_policy_bounds(self.max_x, self.max_abs_y, self.max_iterations)

    @property
    def is_unbounded(self) -> bool:
        """True when neither the x nor the |y| bound is configured."""
        return self.max_x is None and self.max_abs_y is None

    def has_reached(self, current: Point) -> bool:
        """
        True if current lies beyond a configured bound.

        Both bounds are exclusive: a point exactly on max_x or with
        |y| == max_abs_y is still recorded.
        """
        if self.max_x is not None and current.x > self.max_x:
            return True
        if self.max_abs_y is not None and abs(current.y) > self.max_abs_y:
            return True
        return False

    def exceeded_iterations(self, count: int) -> bool:
        """True once count recorded points have reached the iteration cap."""
        return count >= self.max_iterations


__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "TerminationPolicy",
    "check_policy_bounds",
    "is_degenerate",
    "is_degenerate_point",
]
