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
Visualization Tools
===================

Viewport computation, color palettes and chart rendering for trajectory
batches.

>>> from eulerflow.visualization import TrajectoryPlotter, compute_viewport
>>>
>>> viewport = compute_viewport(batch["trajectories"], margin=1.0)
>>> TrajectoryPlotter().render(batch["trajectories"], viewport, "output.png")
"""

from .bounds import DEFAULT_MARGIN, compute_viewport
from .themes import (
    ColorSchemes,
    PlotThemes,
    color_for_index,
    hex_to_rgb,
    with_alpha,
)
from .trajectory_plotter import DEFAULT_CANVAS_SIZE, TrajectoryPlotter

__all__ = [
    "DEFAULT_CANVAS_SIZE",
    "DEFAULT_MARGIN",
    "ColorSchemes",
    "PlotThemes",
    "TrajectoryPlotter",
    "color_for_index",
    "compute_viewport",
    "hex_to_rgb",
    "with_alpha",
]
