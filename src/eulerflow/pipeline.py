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
End-to-End Run

Ties the pieces together:

    RunConfig -> TrajectoryBatch -> compute_viewport -> TrajectoryPlotter

Errors surface in the order the stages run: ConfigurationError before any
integration, EmptyResultError after the batch, RenderError from the final
write. Nothing is written unless every stage succeeds.
"""

import logging
from typing import Optional

from eulerflow.config import RunConfig
from eulerflow.integration.batch import TrajectoryBatch
from eulerflow.types.trajectories import BatchResult, RunResult
from eulerflow.visualization.bounds import compute_viewport
from eulerflow.visualization.trajectory_plotter import TrajectoryPlotter

logger = logging.getLogger(__name__)


def build_batch(config: RunConfig) -> TrajectoryBatch:
    """Validate config and build the batch it describes."""
    config.validate()
    return TrajectoryBatch(
        derivative=config.resolve_derivative(),
        step=config.step_size,
        policy=config.build_policy(),
        count=config.trajectory_count,
        start_x=config.start_x,
        y_spread=config.y_spread,
        start_y=config.start_y,
        executor=config.executor,
        max_workers=config.max_workers,
    )


def integrate(config: RunConfig) -> BatchResult:
    """Run only the integration stage."""
    return build_batch(config).run()


def run(config: Optional[RunConfig] = None, plotter: Optional[TrajectoryPlotter] = None) -> RunResult:
    """
    Integrate, bound and render one batch.

    Parameters
    ----------
    config : Optional[RunConfig]
        Run parameters (defaults reproduce the reference run)
    plotter : Optional[TrajectoryPlotter]
        Renderer to use (defaults to one using config.color_scheme)

    Returns
    -------
    RunResult

    Raises
    ------
    ConfigurationError
        If config is invalid
    EmptyResultError
        If no trajectory recorded any point
    RenderError
        If the image cannot be rendered or written

    Examples
    --------
    >>> result = run(RunConfig(trajectory_count=3, output_path="three.png"))
    >>> result["output_path"]
    'three.png'
    """
    config = config if config is not None else RunConfig()
    batch = build_batch(config).run()

    for index, result in enumerate(batch["results"]):
        logger.debug(
            "Trajectory %d from y0=%g: %d points, stopped on %s",
            index,
            result["start"].y,
            result["nsteps"],
            result["termination"],
        )

    viewport = compute_viewport(batch["trajectories"], margin=config.margin, anchor_x=config.start_x)
    logger.info(
        "Viewport x=[%g, %g] y=[%g, %g]",
        viewport.left,
        viewport.right,
        viewport.bottom,
        viewport.top,
    )

    if plotter is None:
        plotter = TrajectoryPlotter(color_scheme=config.color_scheme)
    path = plotter.render(
        batch["trajectories"],
        viewport,
        config.output_path,
        canvas_size=config.canvas_size,
        starts=batch["starts"],
    )

    return {
        "batch": batch,
        "viewport": viewport,
        "output_path": str(path),
    }


__all__ = ["build_batch", "integrate", "run"]
