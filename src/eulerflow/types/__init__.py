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
Types Module

Central import point for eulerflow type definitions.

Usage
-----
>>> from eulerflow.types import Point, Trajectory, TrajectoryResult, Viewport

Module Organization
------------------
- core: Point, Trajectory, Viewport, DerivativeFunction
- trajectories: TypedDict result types and array conversion
"""

from .core import (
    DerivativeFunction,
    Point,
    ScalarLike,
    Trajectory,
    Viewport,
)
from .trajectories import (
    BatchResult,
    ExecutorKind,
    RunResult,
    TerminationReason,
    TrajectoryResult,
    trajectory_to_array,
)

__all__ = [
    # Core
    "DerivativeFunction",
    "Point",
    "ScalarLike",
    "Trajectory",
    "Viewport",
    # Results
    "BatchResult",
    "ExecutorKind",
    "RunResult",
    "TerminationReason",
    "TrajectoryResult",
    "trajectory_to_array",
]
