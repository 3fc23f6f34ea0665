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
Command-Line Interface

Usage
-----
    eulerflow                                  # reference run -> output.png
    eulerflow --trajectory-count 4 --output four.png
    eulerflow --config run.json --max-abs-y none -v

Options given on the command line override those from --config, which
override the RunConfig defaults. Bounds accept "none" to disable them.

Exit status is 0 on success, 2 for configuration errors and 1 for any
other eulerflow error.
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from eulerflow.config import RunConfig
from eulerflow.exceptions import ConfigurationError, EulerflowError
from eulerflow.integration.batch import VALID_EXECUTORS
from eulerflow.pipeline import run
from eulerflow.systems.builtin import list_derivatives
from eulerflow.visualization.themes import ColorSchemes

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _optional_float(text: str) -> Optional[float]:
    if text.strip().lower() in ("none", "off", ""):
        return None
    try:
        return float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number or 'none', got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eulerflow",
        description="Integrate dy/dx = f(x, y) with forward Euler from several "
        "initial conditions and plot the trajectories.",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON file with run options")
    parser.add_argument("--trajectory-count", type=int, help="number of trajectories")
    parser.add_argument("--step-size", type=float, help="Euler step size")
    parser.add_argument("--y-spread", type=float, help="spacing of initial y values")
    parser.add_argument("--start-x", type=float, help="initial x of every trajectory")
    parser.add_argument("--start-y", type=float, help="initial y of the first trajectory")
    parser.add_argument("--max-x", type=_optional_float, default=argparse.SUPPRESS,
                        help="stop once x exceeds this ('none' disables)")
    parser.add_argument("--max-abs-y", type=_optional_float, default=argparse.SUPPRESS,
                        help="stop once |y| exceeds this ('none' disables)")
    parser.add_argument("--max-iterations", type=int, help="hard cap on points per trajectory")
    parser.add_argument("--canvas-size", type=int, nargs=2, metavar=("WIDTH", "HEIGHT"),
                        help="image size in pixels")
    parser.add_argument("-o", "--output", dest="output_path", help="output image path")
    parser.add_argument("--margin", type=float, help="viewport padding")
    parser.add_argument("--executor", choices=VALID_EXECUTORS, help="batch dispatch strategy")
    parser.add_argument("--max-workers", type=int, help="worker pool size")
    parser.add_argument("--derivative", choices=list_derivatives(), help="built-in f(x, y)")
    parser.add_argument("--color-scheme", choices=ColorSchemes.available(),
                        help="line color palette")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    """Merge --config file options with explicit command-line options."""
    options: Dict[str, Any] = {}
    if args.config:
        options.update(RunConfig.from_json(args.config).to_dict())

    for name in RunConfig.option_names():
        if not hasattr(args, name):
            continue
        value = getattr(args, name)
        # max_x / max_abs_y use SUPPRESS so an explicit "none" is kept
        if value is None and name not in ("max_x", "max_abs_y"):
            continue
        options[name] = tuple(value) if name == "canvas_size" else value

    return RunConfig.from_dict(options)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        config = config_from_args(args)
        result = run(config)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except EulerflowError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    batch = result["batch"]
    logger.info(
        "Done: %d trajectories, %d points, image at %s",
        len(batch["trajectories"]),
        batch["total_points"],
        result["output_path"],
    )
    return 0


__all__ = ["build_parser", "config_from_args", "main"]
