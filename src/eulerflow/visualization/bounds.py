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
Viewport Bounds

Derives the plotting rectangle from the union of all trajectory points,
padded on every side by a fixed margin.
"""

import math
from typing import Optional, Sequence

import numpy as np

from eulerflow.exceptions import ConfigurationError, EmptyResultError
from eulerflow.types.core import Trajectory, Viewport
from eulerflow.types.trajectories import trajectory_to_array

DEFAULT_MARGIN = 1.0


def compute_viewport(
    trajectories: Sequence[Trajectory],
    margin: float = DEFAULT_MARGIN,
    anchor_x: Optional[float] = None,
) -> Viewport:
    """
    Compute padded bounds covering every point of every trajectory.

    Parameters
    ----------
    trajectories : Sequence[Trajectory]
        Trajectories to cover; empty ones are skipped
    margin : float
        Padding added to each side
    anchor_x : Optional[float]
        If given, the left bound is anchor_x - margin instead of the
        smallest observed x (useful when every trajectory starts at the
        same x)

    Returns
    -------
    Viewport
        (left, right, bottom, top)

    Raises
    ------
    EmptyResultError
        If the trajectories contain no points at all
    ConfigurationError
        If margin is negative or not finite

    Examples
    --------
    >>> compute_viewport([(Point(0.0, 5.0), Point(3.0, 5.0))])
    Viewport(left=-1.0, right=4.0, bottom=4.0, top=6.0)
    """
    if not math.isfinite(margin) or margin < 0:
        raise ConfigurationError(f"margin must be a non-negative finite number, got {margin}")

    arrays = [trajectory_to_array(points) for points in trajectories if len(points) > 0]
    if not arrays:
        raise EmptyResultError(
            f"Cannot compute bounds: {len(trajectories)} trajectories contain no points. "
            "Every initial condition was degenerate or already past the termination bounds."
        )

    xy = np.concatenate(arrays, axis=0)
    min_x, min_y = xy.min(axis=0)
    max_x, max_y = xy.max(axis=0)

    left = float(anchor_x) if anchor_x is not None else float(min_x)

    return Viewport(
        left=left - margin,
        right=float(max_x) + margin,
        bottom=float(min_y) - margin,
        top=float(max_y) + margin,
    )


__all__ = ["DEFAULT_MARGIN", "compute_viewport"]
