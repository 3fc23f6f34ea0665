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
Unit Tests for the end-to-end run and the command-line interface

Figure.to_image is patched so no Kaleido browser is needed.
"""

import json

import plotly.graph_objects as go
import pytest

from eulerflow.cli import build_parser, config_from_args, main
from eulerflow.config import RunConfig
from eulerflow.exceptions import ConfigurationError, EmptyResultError, RenderError
from eulerflow.pipeline import build_batch, integrate, run
from eulerflow.types.core import Viewport

FAKE_PNG = b"\x89PNG\r\n\x1a\nfake"


@pytest.fixture(autouse=True)
def fake_kaleido(monkeypatch):
    monkeypatch.setattr(go.Figure, "to_image", lambda self, *args, **kwargs: FAKE_PNG)


@pytest.fixture
def small_config(tmp_path):
    return RunConfig(
        trajectory_count=3,
        step_size=0.01,
        max_x=5.0,
        max_abs_y=150.0,
        output_path=str(tmp_path / "output.png"),
    )


# ============================================================================
# Pipeline
# ============================================================================


class TestRun:
    def test_writes_image(self, small_config, tmp_path):
        result = run(small_config)

        assert result["output_path"] == small_config.output_path
        assert (tmp_path / "output.png").read_bytes() == FAKE_PNG

    def test_batch_and_viewport(self, small_config):
        result = run(small_config)
        batch = result["batch"]

        assert len(batch["trajectories"]) == 3
        assert [t[0].y for t in batch["trajectories"]] == [0.0, 10.0, 20.0]
        assert isinstance(result["viewport"], Viewport)
        assert result["viewport"].left == small_config.start_x - small_config.margin
        assert result["viewport"].right == pytest.approx(5.0 + small_config.margin, abs=0.02)

    def test_viewport_covers_all_points(self, small_config):
        result = run(small_config)
        viewport = result["viewport"]

        for trajectory in result["batch"]["trajectories"]:
            for point in trajectory:
                assert viewport.left < point.x < viewport.right
                assert viewport.bottom < point.y < viewport.top

    def test_invalid_config_integrates_nothing(self, tmp_path):
        calls = []

        def derivative(x, y):
            calls.append((x, y))
            return 0.0

        config = RunConfig(
            trajectory_count=0, derivative=derivative, output_path=str(tmp_path / "out.png")
        )

        with pytest.raises(ConfigurationError):
            run(config)

        assert calls == []
        assert not (tmp_path / "out.png").exists()

    def test_empty_result_writes_nothing(self, tmp_path):
        config = RunConfig(
            trajectory_count=2, start_x=200.0, output_path=str(tmp_path / "out.png")
        )

        with pytest.raises(EmptyResultError):
            run(config)

        assert not (tmp_path / "out.png").exists()

    def test_render_error_propagates(self, small_config, monkeypatch):
        def broken(self, *args, **kwargs):
            raise RuntimeError("kaleido missing")

        monkeypatch.setattr(go.Figure, "to_image", broken)

        with pytest.raises(RenderError, match="kaleido missing"):
            run(small_config)

    def test_integrate_only(self, small_config):
        batch = integrate(small_config)

        assert batch["total_points"] > 0

    def test_build_batch(self, small_config):
        batch = build_batch(small_config)

        assert batch.count == 3
        assert batch.policy.max_x == 5.0


# ============================================================================
# CLI
# ============================================================================


class TestCli:
    def test_success(self, tmp_path):
        out = tmp_path / "cli.png"

        code = main([
            "--trajectory-count", "2",
            "--step-size", "0.01",
            "--max-x", "3",
            "--output", str(out),
        ])

        assert code == 0
        assert out.read_bytes() == FAKE_PNG

    def test_configuration_error_exit_code(self, tmp_path, capsys):
        code = main(["--trajectory-count", "0", "--output", str(tmp_path / "x.png")])

        assert code == 2
        assert "trajectory_count must be positive" in capsys.readouterr().err

    def test_empty_result_exit_code(self, tmp_path, capsys):
        code = main(["--start-x", "500", "--output", str(tmp_path / "x.png")])

        assert code == 1
        assert "no points" in capsys.readouterr().err
        assert not (tmp_path / "x.png").exists()

    def test_none_disables_bound(self):
        args = build_parser().parse_args(["--max-abs-y", "none"])

        config = config_from_args(args)

        assert config.max_abs_y is None
        assert config.max_x == 150.0

    def test_unspecified_options_keep_defaults(self):
        config = config_from_args(build_parser().parse_args([]))

        assert config == RunConfig()

    def test_config_file_with_overrides(self, tmp_path):
        path = tmp_path / "run.json"
        path.write_text(json.dumps({"trajectory_count": 4, "y_spread": 2.5}))

        args = build_parser().parse_args(["--config", str(path), "--trajectory-count", "6"])
        config = config_from_args(args)

        assert config.trajectory_count == 6
        assert config.y_spread == 2.5

    def test_canvas_size(self):
        args = build_parser().parse_args(["--canvas-size", "640", "480"])

        assert config_from_args(args).canvas_size == (640, 480)
