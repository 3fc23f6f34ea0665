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
eulerflow
=========

Forward Euler integration of scalar ODEs dy/dx = f(x, y) from a fan of
initial conditions, rendered as an overlaid line chart.

>>> from eulerflow import RunConfig, run
>>> result = run(RunConfig(trajectory_count=10, step_size=0.001))
>>> result["output_path"]
'output.png'

Lower-level pieces:

>>> from eulerflow import ExplicitEulerIntegrator, Point, TerminationPolicy
>>> integrator = ExplicitEulerIntegrator(lambda x, y: 0.0, 1.0, TerminationPolicy(max_x=3.0))
>>> len(integrator.trajectory(Point(0.0, 5.0)))
4
"""

from .config import RunConfig
from .exceptions import (
    ConfigurationError,
    EmptyResultError,
    EulerflowError,
    RenderError,
    UnboundedPolicyWarning,
)
from .integration import (
    ExplicitEulerIntegrator,
    TerminationPolicy,
    TrajectoryBatch,
    integrate_trajectory,
    is_degenerate,
    run_batch,
)
from .pipeline import run
from .types import Point, Trajectory, Viewport
from .visualization import TrajectoryPlotter, color_for_index, compute_viewport

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "EmptyResultError",
    "EulerflowError",
    "ExplicitEulerIntegrator",
    "Point",
    "RenderError",
    "RunConfig",
    "TerminationPolicy",
    "Trajectory",
    "TrajectoryBatch",
    "TrajectoryPlotter",
    "UnboundedPolicyWarning",
    "Viewport",
    "color_for_index",
    "compute_viewport",
    "integrate_trajectory",
    "is_degenerate",
    "run",
    "run_batch",
]
