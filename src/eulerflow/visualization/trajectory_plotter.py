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
Trajectory Plotter - Overlaid Line Chart Rendering

Draws each trajectory as a line series on one 2D Cartesian chart and
writes the chart to a raster image.

Key Features
------------
- One colored line per trajectory, colors cycled from a fixed palette
- Axis ranges taken from a Viewport
- White canvas, grid mesh, bordered translucent legend
- Raster export through Kaleido, written atomically

Usage
-----
>>> from eulerflow.visualization import TrajectoryPlotter, compute_viewport
>>>
>>> plotter = TrajectoryPlotter()
>>> fig = plotter.plot(batch["trajectories"], compute_viewport(batch["trajectories"]))
>>> plotter.save(fig, "output.png", width=1280, height=960)
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence, Union

import plotly.graph_objects as go

from eulerflow.exceptions import RenderError
from eulerflow.types.core import Point, Trajectory, Viewport
from eulerflow.types.trajectories import trajectory_to_array
from eulerflow.visualization.themes import PlotThemes, color_for_index

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_SIZE = (1280, 960)


class TrajectoryPlotter:
    """
    Renders trajectories as an overlaid line chart.

    Attributes
    ----------
    theme : str or dict
        Theme passed to PlotThemes
    color_scheme : str
        Palette used for line colors (defaults to the theme's palette)

    Examples
    --------
    >>> plotter = TrajectoryPlotter(color_scheme="tableau")
    >>> fig = plotter.plot(trajectories, viewport, starts=starts)
    >>> len(fig.data) == len(trajectories)
    True
    """

    def __init__(self, theme="classic", color_scheme: Optional[str] = None):
        self.theme = theme
        self.color_scheme = color_scheme or PlotThemes.get_theme(theme)["color_scheme"]

    # =========================================================================
    # Plotting
    # =========================================================================

    def plot(
        self,
        trajectories: Sequence[Trajectory],
        viewport: Optional[Viewport] = None,
        starts: Optional[Sequence[Point]] = None,
        title: Optional[str] = None,
        x_label: str = "x",
        y_label: str = "y",
        canvas_size=DEFAULT_CANVAS_SIZE,
    ) -> go.Figure:
        """
        Build a figure with one line trace per trajectory.

        Parameters
        ----------
        trajectories : Sequence[Trajectory]
            Trajectories in index order. Trace i gets color_for_index(i).
            Empty trajectories still get a (blank) trace so colors stay
            aligned with indices.
        viewport : Optional[Viewport]
            Axis ranges. If None, Plotly autoscales.
        starts : Optional[Sequence[Point]]
            Initial conditions, used for legend labels
        title : Optional[str]
            Chart title
        x_label, y_label : str
            Axis titles
        canvas_size : Tuple[int, int]
            (width, height) in pixels

        Returns
        -------
        go.Figure
        """
        if starts is not None and len(starts) != len(trajectories):
            raise ValueError(
                f"Got {len(starts)} starts for {len(trajectories)} trajectories"
            )

        width, height = canvas_size
        fig = go.Figure()

        for index, points in enumerate(trajectories):
            xy = trajectory_to_array(points)
            fig.add_trace(
                go.Scatter(
                    x=xy[:, 0],
                    y=xy[:, 1],
                    mode="lines",
                    name=self._label(index, starts),
                    line=dict(color=color_for_index(index, self.color_scheme)),
                    showlegend=True,
                )
            )

        fig.update_layout(
            title=title,
            xaxis_title=x_label,
            yaxis_title=y_label,
            width=width,
            height=height,
            margin=dict(l=60, r=20, t=40 if title else 20, b=50),
            showlegend=True,
        )

        PlotThemes.apply_theme(fig, self.theme)

        if viewport is not None:
            fig.update_xaxes(range=list(viewport.x_range))
            fig.update_yaxes(range=list(viewport.y_range))

        return fig

    @staticmethod
    def _label(index: int, starts: Optional[Sequence[Point]]) -> str:
        if starts is None:
            return f"Trajectory {index + 1}"
        return f"y₀ = {starts[index].y:g}"

    # =========================================================================
    # Export
    # =========================================================================

    def save(
        self,
        fig: go.Figure,
        path: Union[str, Path],
        width: Optional[int] = None,
        height: Optional[int] = None,
        image_format: str = "png",
    ) -> Path:
        """
        Render fig to a raster image and write it to path.

        The image is rendered to memory first and then written through a
        temporary file in the target directory, which is renamed over path
        only once complete. A failed save leaves no file behind.

        Raises
        ------
        RenderError
            If rendering or writing fails
        """
        path = Path(path)

        try:
            image = fig.to_image(format=image_format, width=width, height=height)
        except Exception as exc:
            raise RenderError(f"Failed to render chart as {image_format}: {exc}") from exc

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(image)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise RenderError(f"Failed to write image to {path}: {exc}") from exc

        logger.info("Wrote %d-byte %s image to %s", len(image), image_format, path)
        return path

    def render(
        self,
        trajectories: Sequence[Trajectory],
        viewport: Viewport,
        path: Union[str, Path],
        canvas_size=DEFAULT_CANVAS_SIZE,
        **kwargs,
    ) -> Path:
        """Plot trajectories and save the chart in one call."""
        fig = self.plot(trajectories, viewport, canvas_size=canvas_size, **kwargs)
        width, height = canvas_size
        return self.save(fig, path, width=width, height=height)


__all__ = ["DEFAULT_CANVAS_SIZE", "TrajectoryPlotter"]
