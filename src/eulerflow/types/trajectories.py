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
Trajectory and Result Types

Result types are TypedDict, so integrator and batch outputs can be indexed
by key, serialized with json, and checked statically.

Usage
-----
>>> from eulerflow.types.trajectories import TrajectoryResult, trajectory_to_array
>>>
>>> result: TrajectoryResult = integrator.integrate(Point(0.0, 5.0))
>>> result["termination"]
'policy'
>>> xy = trajectory_to_array(result["points"])  # (T, 2)
"""

from typing import List, Sequence

import numpy as np
from typing_extensions import Literal, TypedDict

from .core import Point, Trajectory, Viewport

TerminationReason = Literal["policy", "degenerate", "max_iterations"]
"""
Why an integration stopped.

- 'policy': the next point exceeded max_x or max_abs_y
- 'degenerate': the next point had a NaN or infinite coordinate
- 'max_iterations': the iteration cap was reached
"""

ExecutorKind = Literal["thread", "process", "serial"]
"""How a batch dispatches its integrations."""


class TrajectoryResult(TypedDict, total=False):
    """
    Result of integrating one initial condition.

    Attributes
    ----------
    points : Trajectory
        Recorded points, in generation order
    start : Point
        Initial condition
    termination : TerminationReason
        Why integration stopped
    nsteps : int
        Number of Euler steps taken (equals len(points))
    nfev : int
        Number of derivative evaluations
    integration_time : float
        Wall-clock computation time in seconds
    solver : str
        Name of the integrator

    Examples
    --------
    >>> result = integrator.integrate(Point(0.0, 5.0))
    >>> if result["termination"] == "degenerate":
    ...     print(f"Blew up after {result['nsteps']} steps")
    """
    points: Trajectory
    start: Point
    termination: TerminationReason
    nsteps: int
    nfev: int
    integration_time: float
    solver: str


class BatchResult(TypedDict, total=False):
    """
    Result of integrating a batch of initial conditions.

    All list fields are ordered by input index, regardless of the order in
    which the underlying integrations finished.

    Attributes
    ----------
    trajectories : List[Trajectory]
        trajectories[i] belongs to starts[i]
    results : List[TrajectoryResult]
        Full per-trajectory results, same ordering
    starts : List[Point]
        Initial conditions
    total_points : int
        Sum of trajectory lengths
    batch_time : float
        Wall-clock time for the whole batch in seconds
    executor : ExecutorKind
        Dispatch strategy used
    """
    trajectories: List[Trajectory]
    results: List[TrajectoryResult]
    starts: List[Point]
    total_points: int
    batch_time: float
    executor: ExecutorKind


class RunResult(TypedDict, total=False):
    """
    Result of a full run: integration, bounds and rendering.

    Attributes
    ----------
    batch : BatchResult
        Integrated trajectories
    viewport : Viewport
        Plotted bounds
    output_path : str
        Path of the written image
    """
    batch: BatchResult
    viewport: Viewport
    output_path: str


def trajectory_to_array(points: Sequence[Point]) -> np.ndarray:
    """
    Convert a trajectory to a (T, 2) float array of [x, y] rows.

    An empty trajectory yields an array of shape (0, 2).

    Examples
    --------
    >>> trajectory_to_array((Point(0.0, 1.0), Point(0.5, 1.5)))
    array([[0. , 1. ],
           [0.5, 1.5]])
    """
    if len(points) == 0:
        return np.empty((0, 2), dtype=float)
    return np.asarray(points, dtype=float)


__all__ = [
    "TerminationReason",
    "ExecutorKind",
    "TrajectoryResult",
    "BatchResult",
    "RunResult",
    "trajectory_to_array",
]
