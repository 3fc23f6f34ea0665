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
Explicit Euler Integrator

Fixed-step forward Euler integration of a scalar ODE dy/dx = f(x, y):

    y_{k+1} = y_k + h * f(x_k, y_k)
    x_{k+1} = x_k + h

Integration starts from an initial Point and continues until the
TerminationPolicy fires, a coordinate turns NaN or infinite, or the
policy's iteration cap is reached. The stopping point is never recorded.
A derivative that raises an ArithmeticError (ZeroDivisionError,
OverflowError) yields a NaN slope, so the next state is degenerate.

Examples
--------
>>> integrator = ExplicitEulerIntegrator(
...     derivative=lambda x, y: 1.0,
...     step=0.5,
...     policy=TerminationPolicy(max_x=1.0),
... )
>>> result = integrator.integrate(Point(0.0, 0.0))
>>> result["points"]
(Point(x=0.0, y=0.0), Point(x=0.5, y=0.5), Point(x=1.0, y=1.0))
>>> result["termination"]
'policy'
"""

import logging
import math
import numbers
import time
import warnings
from typing import Any, Dict, List, Optional

from eulerflow.exceptions import (
    ConfigurationError,
    UnboundedPolicyWarning,
    format_errors,
)
from eulerflow.integration.termination import (
    TerminationPolicy,
    is_degenerate_point,
)
from eulerflow.types.core import DerivativeFunction, Point, ScalarLike, Trajectory
from eulerflow.types.trajectories import TerminationReason, TrajectoryResult

logger = logging.getLogger(__name__)


def check_step_size(step: Any) -> List[str]:
    """Return a list of problems with a step size (empty if valid)."""
    if isinstance(step, bool) or not isinstance(step, numbers.Real):
        return [f"step size must be a real number, got {step!r}"]
    if not math.isfinite(step):
        return [f"step size must be finite, got {step}"]
    if step <= 0:
        return [f"step size must be positive, got {step}"]
    return []


class ExplicitEulerIntegrator:
    """
    Explicit Euler integrator (Forward Euler) for dy/dx = f(x, y).

    First-order method: y_{k+1} = y_k + h * f(x_k, y_k)

    The integrator holds no per-run state besides cumulative statistics,
    so integrate() is a pure function of the initial point: identical
    inputs give bit-identical trajectories.

    Parameters
    ----------
    derivative : DerivativeFunction
        Callable (x, y) -> dy/dx
    step : float
        Fixed step size h > 0
    policy : Optional[TerminationPolicy]
        Stopping predicate. Defaults to a policy with only the iteration cap.
    warn_unbounded : bool
        If True (default), warn when the policy has neither an x nor a |y|
        bound.

    Raises
    ------
    ConfigurationError
        If derivative is not callable or step is not a positive finite number

    Examples
    --------
    >>> import numpy as np
    >>> integrator = ExplicitEulerIntegrator(
    ...     lambda x, y: np.cbrt(y) + x,
    ...     step=0.001,
    ...     policy=TerminationPolicy(max_x=150.0, max_abs_y=150.0),
    ... )
    >>> points = integrator.trajectory(Point(0.0, 10.0))
    >>> integrator.get_stats()["total_steps"] == len(points)
    True
    """

    def __init__(
        self,
        derivative: DerivativeFunction,
        step: ScalarLike,
        policy: Optional[TerminationPolicy] = None,
        warn_unbounded: bool = True,
    ):
        errors = check_step_size(step)
        if not callable(derivative):
            errors.append(f"derivative must be callable, got {type(derivative).__name__}")
        if errors:
            raise ConfigurationError(format_errors("Invalid integrator configuration", errors))

        self.derivative = derivative
        self.step_size = float(step)
        self.policy = policy if policy is not None else TerminationPolicy()

        if warn_unbounded and self.policy.is_unbounded:
            warnings.warn(
                "Termination policy has no max_x or max_abs_y bound; integration "
                f"will run until overflow or max_iterations={self.policy.max_iterations}",
                UnboundedPolicyWarning,
                stacklevel=2,
            )

        self._stats = {
            "total_steps": 0,
            "total_fev": 0,
            "total_time": 0.0,
        }

    def _slope(self, x: float, y: float) -> float:
        """f(x, y) as a float, or NaN when f raises an ArithmeticError."""
        try:
            return float(self.derivative(x, y))
        except ArithmeticError:
            return math.nan

    def step(self, point: Point) -> Point:
        """
        Take one Euler step from point.

        Returns
        -------
        Point
            (x + h, y + h * f(x, y)); y is NaN if f raised an ArithmeticError
        """
        slope = self._slope(point.x, point.y)
        self._stats["total_fev"] += 1
        self._stats["total_steps"] += 1
        return Point(point.x + self.step_size, point.y + slope * self.step_size)

    def integrate(self, start: Point) -> TrajectoryResult:
        """
        Integrate from start until termination.

        Each iteration checks the iteration cap, then the policy, then
        degeneracy, and only then records the current point and steps.

        Parameters
        ----------
        start : Point
            Initial condition. A plain (x, y) tuple is accepted.

        Returns
        -------
        TrajectoryResult
            TypedDict containing:
            - points: Recorded points (possibly empty)
            - start: Initial condition
            - termination: 'policy', 'degenerate' or 'max_iterations'
            - nsteps: Number of steps
            - nfev: Derivative evaluations
            - integration_time: Computation time
            - solver: Integrator name
        """
        start_time = time.time()

        start = Point.from_tuple(start)
        policy = self.policy
        h = self.step_size

        points = []
        current = start
        termination: TerminationReason

        while True:
            if policy.exceeded_iterations(len(points)):
                termination = "max_iterations"
                break
            if policy.has_reached(current):
                termination = "policy"
                break
            if is_degenerate_point(current):
                termination = "degenerate"
                break

            points.append(current)

            dy = self._slope(current.x, current.y) * h
            current = Point(current.x + h, current.y + dy)

        nsteps = len(points)
        elapsed = time.time() - start_time

        self._stats["total_steps"] += nsteps
        self._stats["total_fev"] += nsteps
        self._stats["total_time"] += elapsed

        logger.debug(
            "Integrated from (%g, %g): %d points, stopped on %s in %.3fs",
            start.x,
            start.y,
            nsteps,
            termination,
            elapsed,
        )

        result: TrajectoryResult = {
            "points": tuple(points),
            "start": start,
            "termination": termination,
            "nsteps": nsteps,
            "nfev": nsteps,
            "integration_time": elapsed,
            "solver": self.name,
        }
        return result

    def trajectory(self, start: Point) -> Trajectory:
        """Integrate from start and return only the recorded points."""
        return self.integrate(start)["points"]

    @property
    def name(self) -> str:
        return "Explicit Euler"

    def get_stats(self) -> Dict[str, Any]:
        """
        Get cumulative integration statistics.

        Returns
        -------
        dict
            - 'total_steps': Total Euler steps taken
            - 'total_fev': Total derivative evaluations
            - 'total_time': Total integration time
            - 'avg_fev_per_step': Average evaluations per step
        """
        avg_fev = self._stats["total_fev"] / max(1, self._stats["total_steps"])

        return {
            **self._stats,
            "avg_fev_per_step": avg_fev,
        }

    def reset_stats(self):
        """Reset integration statistics to zero."""
        self._stats["total_steps"] = 0
        self._stats["total_fev"] = 0
        self._stats["total_time"] = 0.0

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"step={self.step_size}, policy={self.policy!r})"
        )

    def __str__(self) -> str:
        return f"{self.name} (h={self.step_size:.4g})"


def integrate_trajectory(
    start: Point,
    step: ScalarLike,
    policy: TerminationPolicy,
    derivative: DerivativeFunction,
) -> Trajectory:
    """
    Functional form of ExplicitEulerIntegrator.trajectory().

    Examples
    --------
    >>> integrate_trajectory(Point(0.0, 5.0), 1.0, TerminationPolicy(max_x=3.0), lambda x, y: 0.0)
    (Point(x=0.0, y=5.0), Point(x=1.0, y=5.0), Point(x=2.0, y=5.0), Point(x=3.0, y=5.0))
    """
    return ExplicitEulerIntegrator(derivative, step, policy).trajectory(start)


__all__ = [
    "ExplicitEulerIntegrator",
    "check_step_size",
    "integrate_trajectory",
]
