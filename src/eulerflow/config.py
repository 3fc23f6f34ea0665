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
Run Configuration

RunConfig gathers every parameter of a run: the batch of initial
conditions, the step size, the termination bounds and the image output.
Defaults reproduce the reference run: ten trajectories of
dy/dx = cbrt(y) + x from (0, 0), (0, 10), ..., (0, 90), step 0.001,
stopped at x > 150 or |y| > 150, rendered to a 1280x960 output.png.

Usage
-----
>>> config = RunConfig.from_dict({"trajectory_count": 4, "step_size": 0.01})
>>> config.validate()
>>> policy = config.build_policy()
>>>
>>> config = RunConfig.from_json("run.json")
"""

import json
import math
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from eulerflow.exceptions import ConfigurationError, format_errors
from eulerflow.integration.batch import VALID_EXECUTORS
from eulerflow.integration.euler_integrator import check_step_size
from eulerflow.integration.termination import (
    DEFAULT_MAX_ITERATIONS,
    TerminationPolicy,
    check_policy_bounds,
)
from eulerflow.systems.builtin import get_derivative
from eulerflow.types.core import DerivativeFunction
from eulerflow.visualization.bounds import DEFAULT_MARGIN
from eulerflow.visualization.themes import ColorSchemes
from eulerflow.visualization.trajectory_plotter import DEFAULT_CANVAS_SIZE


@dataclass
class RunConfig:
    """
    Parameters for one trajectory-batch run.

    Attributes
    ----------
    trajectory_count : int
        Number of initial conditions N
    step_size : float
        Euler step h
    y_spread : float
        Spacing between consecutive initial y values
    start_x : float
        Initial x shared by all trajectories
    start_y : float
        Initial y of the first trajectory
    max_x : Optional[float]
        Stop once x exceeds this (None disables)
    max_abs_y : Optional[float]
        Stop once |y| exceeds this (None disables)
    max_iterations : int
        Hard cap on points per trajectory
    canvas_size : Tuple[int, int]
        Output image (width, height) in pixels
    output_path : str
        Output image path
    margin : float
        Viewport padding on each side
    executor : str
        'thread', 'process' or 'serial'
    max_workers : Optional[int]
        Pool size (None lets the pool decide)
    derivative : str or callable
        Built-in derivative name or a callable (x, y) -> dy/dx
    color_scheme : str
        Palette for line colors
    """

    trajectory_count: int = 10
    step_size: float = 0.001
    y_spread: float = 10.0
    start_x: float = 0.0
    start_y: float = 0.0
    max_x: Optional[float] = 150.0
    max_abs_y: Optional[float] = 150.0
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    canvas_size: Tuple[int, int] = DEFAULT_CANVAS_SIZE
    output_path: str = "output.png"
    margin: float = DEFAULT_MARGIN
    executor: str = "thread"
    max_workers: Optional[int] = None
    derivative: Union[str, Callable[[float, float], float]] = "cbrt_plus_x"
    color_scheme: str = "classic"

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def option_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> "RunConfig":
        """
        Build a config from a dict of recognized options.

        Missing options take their defaults.

        Raises
        ------
        ConfigurationError
            If options contains unrecognized keys
        """
        unknown = sorted(set(options) - set(cls.option_names()))
        if unknown:
            raise ConfigurationError(
                f"Unrecognized configuration options: {', '.join(unknown)}. "
                f"Recognized: {', '.join(cls.option_names())}"
            )

        options = dict(options)
        if "canvas_size" in options and isinstance(options["canvas_size"], list):
            options["canvas_size"] = tuple(options["canvas_size"])
        return cls(**options)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "RunConfig":
        """
        Load a config from a JSON object file.

        Raises
        ------
        ConfigurationError
            If the file cannot be read or is not a JSON object
        """
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                options = json.load(f)
        except OSError as exc:
            raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Config file {path} is not valid JSON: {exc}") from exc

        if not isinstance(options, dict):
            raise ConfigurationError(
                f"Config file {path} must contain a JSON object, got {type(options).__name__}"
            )
        return cls.from_dict(options)

    def to_dict(self) -> Dict[str, Any]:
        """Options as a plain dict (a callable derivative is kept as-is)."""
        return asdict(self)

    # =========================================================================
    # Validation
    # =========================================================================

    def check(self) -> List[str]:
        """Return every problem with this config (empty if valid)."""
        errors = []

        if isinstance(self.trajectory_count, bool) or not isinstance(
            self.trajectory_count, numbers.Integral
        ):
            errors.append(f"trajectory_count must be an integer, got {self.trajectory_count!r}")
        elif self.trajectory_count <= 0:
            errors.append(f"trajectory_count must be positive, got {self.trajectory_count}")

        errors.extend(check_step_size(self.step_size))

        for name in ("y_spread", "start_x", "start_y", "margin"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                errors.append(f"{name} must be a real number, got {value!r}")
            elif not math.isfinite(value):
                errors.append(f"{name} must be finite, got {value}")

        if isinstance(self.margin, numbers.Real) and self.margin < 0:
            errors.append(f"margin must be non-negative, got {self.margin}")

        errors.extend(check_policy_bounds(self.max_x, self.max_abs_y, self.max_iterations))

        if (
            not isinstance(self.canvas_size, tuple)
            or len(self.canvas_size) != 2
            or not all(
                isinstance(v, numbers.Integral) and not isinstance(v, bool) and v > 0
                for v in self.canvas_size
            )
        ):
            errors.append(
                f"canvas_size must be a (width, height) pair of positive integers, "
                f"got {self.canvas_size!r}"
            )

        if not isinstance(self.output_path, (str, Path)) or not str(self.output_path):
            errors.append(f"output_path must be a non-empty path, got {self.output_path!r}")

        if self.executor not in VALID_EXECUTORS:
            errors.append(
                f"executor must be one of {list(VALID_EXECUTORS)}, got {self.executor!r}"
            )

        if self.max_workers is not None and (
            isinstance(self.max_workers, bool)
            or not isinstance(self.max_workers, numbers.Integral)
            or self.max_workers <= 0
        ):
            errors.append(
                f"max_workers must be a positive integer or None, got {self.max_workers!r}"
            )

        if isinstance(self.derivative, str):
            try:
                get_derivative(self.derivative)
            except ConfigurationError as exc:
                errors.append(str(exc))
        elif not callable(self.derivative):
            errors.append(
                f"derivative must be a name or a callable, got {type(self.derivative).__name__}"
            )

        if self.color_scheme not in ColorSchemes.available():
            errors.append(
                f"color_scheme must be one of {ColorSchemes.available()}, "
                f"got {self.color_scheme!r}"
            )

        return errors

    def validate(self):
        """
        Raise if the config is invalid.

        Raises
        ------
        ConfigurationError
            Listing every problem found
        """
        errors = self.check()
        if errors:
            raise ConfigurationError(format_errors("Invalid configuration", errors))

    # =========================================================================
    # Derived Objects
    # =========================================================================

    def build_policy(self) -> TerminationPolicy:
        return TerminationPolicy(
            max_x=self.max_x,
            max_abs_y=self.max_abs_y,
            max_iterations=self.max_iterations,
        )

    def resolve_derivative(self) -> DerivativeFunction:
        if isinstance(self.derivative, str):
            return get_derivative(self.derivative)
        return self.derivative


__all__ = ["RunConfig"]
