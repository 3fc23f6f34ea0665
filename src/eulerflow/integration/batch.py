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
Trajectory Batch - Fan-out Integration over Initial Conditions

Integrates one trajectory per initial condition

    start_i = (start_x, start_y + i * y_spread),   i = 0 .. N-1

and gathers the results into index-ordered lists. Each integration is a
pure computation with no shared state, so the batch scatters one task per
index to a concurrent.futures executor and slots every result back into
position i as it completes.

Executors
---------
- 'thread': ThreadPoolExecutor (default)
- 'process': ProcessPoolExecutor, needs a picklable derivative
  (a module-level function, not a lambda)
- 'serial': plain loop in the calling thread

Examples
--------
>>> batch = TrajectoryBatch(
...     derivative=cbrt_plus_x,
...     step=0.001,
...     policy=TerminationPolicy(max_x=150.0, max_abs_y=150.0),
...     count=10,
...     y_spread=10.0,
... )
>>> result = batch.run()
>>> result["trajectories"][1][0]
Point(x=0.0, y=10.0)
"""

import logging
import math
import numbers
import pickle
import time
import warnings
from concurrent.futures import (
    Executor,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from typing import List, Optional

from eulerflow.exceptions import (
    ConfigurationError,
    UnboundedPolicyWarning,
    format_errors,
)
from eulerflow.integration.euler_integrator import (
    ExplicitEulerIntegrator,
    check_step_size,
)
from eulerflow.integration.termination import TerminationPolicy
from eulerflow.types.core import DerivativeFunction, Point, ScalarLike
from eulerflow.types.trajectories import BatchResult, ExecutorKind, TrajectoryResult

logger = logging.getLogger(__name__)

VALID_EXECUTORS = ("thread", "process", "serial")


def _integrate_one(
    derivative: DerivativeFunction,
    step: float,
    policy: TerminationPolicy,
    start: Point,
) -> TrajectoryResult:
    # Module level so ProcessPoolExecutor can pickle it
    integrator = ExplicitEulerIntegrator(derivative, step, policy, warn_unbounded=False)
    return integrator.integrate(start)


class TrajectoryBatch:
    """
    Runs N independent Euler integrations and collects them by index.

    All parameters are validated at construction, so a malformed batch
    fails before any integration starts.

    Parameters
    ----------
    derivative : DerivativeFunction
        Shared right-hand side f(x, y)
    step : float
        Fixed step size h > 0
    policy : TerminationPolicy
        Shared termination policy (immutable, safe to share)
    count : int
        Number of trajectories N > 0
    start_x : float
        x coordinate of every initial condition
    y_spread : float
        Spacing between consecutive initial y values
    start_y : float
        y coordinate of the first initial condition
    executor : ExecutorKind
        'thread', 'process' or 'serial'
    max_workers : Optional[int]
        Worker count for the pool executors (None lets the pool decide)

    Raises
    ------
    ConfigurationError
        If any parameter is invalid
    """

    def __init__(
        self,
        derivative: DerivativeFunction,
        step: ScalarLike,
        policy: TerminationPolicy,
        count: int,
        start_x: ScalarLike = 0.0,
        y_spread: ScalarLike = 10.0,
        start_y: ScalarLike = 0.0,
        executor: ExecutorKind = "thread",
        max_workers: Optional[int] = None,
    ):
        errors = check_step_size(step)

        if not callable(derivative):
            errors.append(f"derivative must be callable, got {type(derivative).__name__}")

        if not isinstance(policy, TerminationPolicy):
            errors.append(
                f"policy must be a TerminationPolicy, got {type(policy).__name__}"
            )

        if isinstance(count, bool) or not isinstance(count, numbers.Integral):
            errors.append(f"trajectory count must be an integer, got {count!r}")
        elif count <= 0:
            errors.append(f"trajectory count must be positive, got {count}")

        for label, value in (("start_x", start_x), ("y_spread", y_spread), ("start_y", start_y)):
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                errors.append(f"{label} must be a real number, got {value!r}")
            elif not math.isfinite(value):
                errors.append(f"{label} must be finite, got {value}")

        if executor not in VALID_EXECUTORS:
            errors.append(f"executor must be one of {list(VALID_EXECUTORS)}, got {executor!r}")
        elif executor == "process" and callable(derivative):
            try:
                pickle.dumps(derivative)
            except (pickle.PicklingError, AttributeError, TypeError) as e:
                errors.append(
                    f"derivative must be picklable for the process executor ({e}); "
                    "use a module-level function or the thread executor"
                )

        if max_workers is not None and (
            isinstance(max_workers, bool)
            or not isinstance(max_workers, numbers.Integral)
            or max_workers <= 0
        ):
            errors.append(f"max_workers must be a positive integer or None, got {max_workers!r}")

        if errors:
            raise ConfigurationError(format_errors("Invalid batch configuration", errors))

        self.derivative = derivative
        self.step_size = float(step)
        self.policy = policy
        self.count = int(count)
        self.start_x = float(start_x)
        self.y_spread = float(y_spread)
        self.start_y = float(start_y)
        self.executor = executor
        self.max_workers = max_workers

        if policy.is_unbounded:
            warnings.warn(
                "Termination policy has no max_x or max_abs_y bound; each trajectory "
                f"will run until overflow or max_iterations={policy.max_iterations}",
                UnboundedPolicyWarning,
                stacklevel=2,
            )

    def starts(self) -> List[Point]:
        """Initial conditions in index order."""
        return [
            Point(self.start_x, self.start_y + i * self.y_spread) for i in range(self.count)
        ]

    def run(self) -> BatchResult:
        """
        Integrate every initial condition and gather results by index.

        Returns
        -------
        BatchResult
            TypedDict with index-ordered trajectories, results and starts
        """
        batch_start = time.time()
        starts = self.starts()

        if self.executor == "serial":
            results = [
                _integrate_one(self.derivative, self.step_size, self.policy, start)
                for start in starts
            ]
        else:
            results = self._run_pooled(starts)

        elapsed = time.time() - batch_start
        total_points = sum(result["nsteps"] for result in results)

        logger.info(
            "Integrated %d trajectories (%d points) with %s executor in %.3fs",
            self.count,
            total_points,
            self.executor,
            elapsed,
        )

        batch: BatchResult = {
            "trajectories": [result["points"] for result in results],
            "results": results,
            "starts": starts,
            "total_points": total_points,
            "batch_time": elapsed,
            "executor": self.executor,
        }
        return batch

    def _make_executor(self) -> Executor:
        if self.executor == "process":
            return ProcessPoolExecutor(max_workers=self.max_workers)
        return ThreadPoolExecutor(max_workers=self.max_workers)

    def _run_pooled(self, starts: List[Point]) -> List[TrajectoryResult]:
        """Scatter one task per index, gather into slot i on completion."""
        slots: List[Optional[TrajectoryResult]] = [None] * len(starts)

        with self._make_executor() as pool:
            futures = {
                pool.submit(
                    _integrate_one, self.derivative, self.step_size, self.policy, start
                ): index
                for index, start in enumerate(starts)
            }
            for future in as_completed(futures):
                slots[futures[future]] = future.result()

        return slots

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(count={self.count}, step={self.step_size}, "
            f"start_x={self.start_x}, y_spread={self.y_spread}, executor={self.executor!r})"
        )


def run_batch(
    derivative: DerivativeFunction,
    step: ScalarLike,
    policy: TerminationPolicy,
    count: int,
    start_x: ScalarLike = 0.0,
    y_spread: ScalarLike = 10.0,
    **kwargs,
) -> BatchResult:
    """
    Convenience wrapper: build a TrajectoryBatch and run it.

    Extra keyword arguments (start_y, executor, max_workers) are passed to
    TrajectoryBatch.
    """
    return TrajectoryBatch(
        derivative, step, policy, count, start_x=start_x, y_spread=y_spread, **kwargs
    ).run()


__all__ = [
    "TrajectoryBatch",
    "VALID_EXECUTORS",
    "run_batch",
]
