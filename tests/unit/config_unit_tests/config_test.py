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
Unit Tests for RunConfig
"""

import json

import pytest

from eulerflow.config import RunConfig
from eulerflow.exceptions import ConfigurationError
from eulerflow.integration.termination import TerminationPolicy
from eulerflow.systems.builtin import cbrt_plus_x, linear_decay


class TestDefaults:
    """Defaults reproduce the reference run"""

    def test_reference_values(self):
        config = RunConfig()

        assert config.trajectory_count == 10
        assert config.step_size == 0.001
        assert config.y_spread == 10.0
        assert config.start_x == 0.0
        assert config.max_x == 150.0
        assert config.max_abs_y == 150.0
        assert config.canvas_size == (1280, 960)
        assert config.output_path == "output.png"
        assert config.margin == 1.0

    def test_defaults_are_valid(self):
        RunConfig().validate()

    def test_build_policy(self):
        policy = RunConfig(max_x=None, max_iterations=100).build_policy()

        assert policy == TerminationPolicy(max_x=None, max_abs_y=150.0, max_iterations=100)

    def test_resolve_derivative_by_name(self):
        assert RunConfig().resolve_derivative() is cbrt_plus_x

    def test_resolve_callable_derivative(self):
        def custom(x, y):
            return x

        assert RunConfig(derivative=custom).resolve_derivative() is custom


class TestFromDict:
    def test_overrides(self):
        config = RunConfig.from_dict({"trajectory_count": 3, "step_size": 0.01})

        assert config.trajectory_count == 3
        assert config.step_size == 0.01
        assert config.y_spread == 10.0

    def test_unknown_keys(self):
        with pytest.raises(ConfigurationError, match="Unrecognized configuration options: colour"):
            RunConfig.from_dict({"colour": "red"})

    def test_canvas_list_becomes_tuple(self):
        config = RunConfig.from_dict({"canvas_size": [640, 480]})

        assert config.canvas_size == (640, 480)
        config.validate()

    def test_round_trip_through_dict(self):
        config = RunConfig(trajectory_count=4, derivative="logistic")

        assert RunConfig.from_dict(config.to_dict()) == config


class TestFromJson:
    def test_load(self, tmp_path):
        path = tmp_path / "run.json"
        path.write_text(json.dumps({"trajectory_count": 2, "max_abs_y": None}))

        config = RunConfig.from_json(path)

        assert config.trajectory_count == 2
        assert config.max_abs_y is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read"):
            RunConfig.from_json(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "run.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="not valid JSON"):
            RunConfig.from_json(path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "run.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError, match="JSON object"):
            RunConfig.from_json(path)


class TestValidate:
    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"trajectory_count": 0}, "trajectory_count must be positive"),
            ({"trajectory_count": 1.5}, "trajectory_count must be an integer"),
            ({"step_size": -0.1}, "step size must be positive"),
            ({"step_size": 0}, "step size must be positive"),
            ({"max_x": float("nan")}, "max_x must not be NaN"),
            ({"max_abs_y": float("nan")}, "max_abs_y must not be NaN"),
            ({"max_iterations": 0}, "max_iterations must be positive"),
            ({"y_spread": float("inf")}, "y_spread must be finite"),
            ({"margin": -1.0}, "margin must be non-negative"),
            ({"canvas_size": (1280,)}, "canvas_size"),
            ({"canvas_size": (0, 960)}, "canvas_size"),
            ({"output_path": ""}, "output_path"),
            ({"executor": "cluster"}, "executor"),
            ({"max_workers": -1}, "max_workers"),
            ({"derivative": "cubic"}, "Unknown derivative"),
            ({"derivative": 3}, "derivative must be a name or a callable"),
            ({"color_scheme": "neon"}, "color_scheme"),
        ],
    )
    def test_invalid(self, kwargs, message):
        with pytest.raises(ConfigurationError, match=message):
            RunConfig(**kwargs).validate()

    def test_collects_all_errors(self):
        errors = RunConfig(trajectory_count=0, step_size=0.0, executor="x").check()

        assert len(errors) == 3

    def test_callable_derivative_valid(self):
        RunConfig(derivative=linear_decay).validate()

    def test_no_bounds_is_valid(self):
        RunConfig(max_x=None, max_abs_y=None).validate()
