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
Numerical Integration

Fixed-step forward Euler integration of dy/dx = f(x, y), with the
termination policy, degeneracy checks and batch fan-out built around it.
"""

from .batch import TrajectoryBatch, run_batch
from .euler_integrator import ExplicitEulerIntegrator, integrate_trajectory
from .termination import (
    DEFAULT_MAX_ITERATIONS,
    TerminationPolicy,
    is_degenerate,
    is_degenerate_point,
)

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "ExplicitEulerIntegrator",
    "TerminationPolicy",
    "TrajectoryBatch",
    "integrate_trajectory",
    "is_degenerate",
    "is_degenerate_point",
    "run_batch",
]
