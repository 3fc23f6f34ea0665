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
Unit Tests for TrajectoryPlotter

Figure construction is checked directly. Most raster export tests patch
Figure.to_image, so they do not need a Kaleido browser; TestKaleidoExport
renders a real PNG and is skipped where Kaleido cannot run.
"""

import struct

import numpy as np
import plotly.graph_objects as go
import pytest

try:
    import kaleido  # noqa: F401

    KALEIDO_AVAILABLE = True
except ImportError:
    KALEIDO_AVAILABLE = False

from eulerflow.exceptions import RenderError
from eulerflow.types.core import Point, Viewport
from eulerflow.visualization.themes import ColorSchemes
from eulerflow.visualization.trajectory_plotter import TrajectoryPlotter

FAKE_PNG = b"\x89PNG\r\n\x1a\nfake"


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def plotter():
    return TrajectoryPlotter()


@pytest.fixture
def trajectories():
    return [
        tuple(Point(float(x), float(i * 10 + x)) for x in range(4))
        for i in range(6)
    ]


@pytest.fixture
def viewport():
    return Viewport(left=-1.0, right=4.0, bottom=-1.0, top=54.0)


@pytest.fixture(scope="module")
def kaleido_usable():
    """Skip when Kaleido is installed but has no browser to render with."""
    try:
        go.Figure().to_image(format="png", width=10, height=10)
    except Exception as exc:
        pytest.skip(f"Kaleido cannot render here: {exc}")


@pytest.fixture
def fake_kaleido(monkeypatch):
    """Replace raster rendering with a fixed byte string."""
    calls = []

    def to_image(self, format=None, width=None, height=None, **kwargs):
        calls.append({"format": format, "width": width, "height": height})
        return FAKE_PNG

    monkeypatch.setattr(go.Figure, "to_image", to_image)
    return calls


# ============================================================================
# Plotting
# ============================================================================


class TestPlot:
    """Figure structure"""

    def test_one_trace_per_trajectory(self, plotter, trajectories, viewport):
        fig = plotter.plot(trajectories, viewport)

        assert isinstance(fig, go.Figure)
        assert len(fig.data) == len(trajectories)
        assert all(trace.mode == "lines" for trace in fig.data)

    def test_trace_data(self, plotter, trajectories, viewport):
        fig = plotter.plot(trajectories, viewport)

        np.testing.assert_array_equal(fig.data[2].x, [0.0, 1.0, 2.0, 3.0])
        np.testing.assert_array_equal(fig.data[2].y, [20.0, 21.0, 22.0, 23.0])

    def test_colors_cycle_through_palette(self, plotter, trajectories, viewport):
        fig = plotter.plot(trajectories, viewport)
        palette = ColorSchemes.CLASSIC

        colors = [trace.line.color for trace in fig.data]

        assert colors == [palette[i % len(palette)] for i in range(len(trajectories))]

    def test_color_scheme_override(self, trajectories, viewport):
        fig = TrajectoryPlotter(color_scheme="tableau").plot(trajectories, viewport)

        assert fig.data[0].line.color == ColorSchemes.TABLEAU[0]

    def test_viewport_sets_axis_ranges(self, plotter, trajectories, viewport):
        fig = plotter.plot(trajectories, viewport)

        assert tuple(fig.layout.xaxis.range) == (-1.0, 4.0)
        assert tuple(fig.layout.yaxis.range) == (-1.0, 54.0)

    def test_canvas_and_legend(self, plotter, trajectories, viewport):
        fig = plotter.plot(trajectories, viewport, canvas_size=(1280, 960))

        assert fig.layout.width == 1280
        assert fig.layout.height == 960
        assert fig.layout.showlegend is True
        assert fig.layout.legend.bordercolor == "#000000"
        assert fig.layout.legend.bgcolor == "rgba(255, 255, 255, 0.8)"
        assert fig.layout.paper_bgcolor == "#FFFFFF"

    def test_labels_from_starts(self, plotter, trajectories, viewport):
        starts = [t[0] for t in trajectories]

        fig = plotter.plot(trajectories, viewport, starts=starts)

        assert fig.data[1].name == "y₀ = 10"

    def test_default_labels(self, plotter, trajectories):
        fig = plotter.plot(trajectories)

        assert fig.data[0].name == "Trajectory 1"

    def test_empty_trajectory_keeps_color_slot(self, plotter, viewport):
        trajectories = [(Point(0.0, 0.0), Point(1.0, 1.0)), (), ((Point(0.0, 2.0)),)]

        fig = plotter.plot(trajectories, viewport)

        assert len(fig.data) == 3
        assert len(fig.data[1].x) == 0
        assert fig.data[2].line.color == ColorSchemes.CLASSIC[2]

    def test_starts_length_mismatch(self, plotter, trajectories):
        with pytest.raises(ValueError, match="starts"):
            plotter.plot(trajectories, starts=[Point()])


# ============================================================================
# Export
# ============================================================================


class TestSave:
    """Raster export and failure handling"""

    def test_writes_image(self, plotter, trajectories, viewport, tmp_path, fake_kaleido):
        fig = plotter.plot(trajectories, viewport)
        path = tmp_path / "output.png"

        written = plotter.save(fig, path, width=1280, height=960)

        assert written == path
        assert path.read_bytes() == FAKE_PNG
        assert fake_kaleido == [{"format": "png", "width": 1280, "height": 960}]

    def test_no_temporary_files_left(self, plotter, trajectories, tmp_path, fake_kaleido):
        plotter.save(plotter.plot(trajectories), tmp_path / "output.png")

        assert [p.name for p in tmp_path.iterdir()] == ["output.png"]

    def test_render_failure(self, plotter, trajectories, tmp_path, monkeypatch):
        def broken(self, *args, **kwargs):
            raise RuntimeError("no browser")

        monkeypatch.setattr(go.Figure, "to_image", broken)
        path = tmp_path / "output.png"

        with pytest.raises(RenderError, match="no browser") as exc_info:
            plotter.save(plotter.plot(trajectories), path)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert not path.exists()

    def test_failure_keeps_previous_image(self, plotter, trajectories, tmp_path, monkeypatch):
        path = tmp_path / "output.png"
        path.write_bytes(b"previous")

        def broken(self, *args, **kwargs):
            raise ValueError("bad format")

        monkeypatch.setattr(go.Figure, "to_image", broken)

        with pytest.raises(RenderError):
            plotter.save(plotter.plot(trajectories), path)

        assert path.read_bytes() == b"previous"

    def test_unwritable_path(self, plotter, trajectories, tmp_path, fake_kaleido):
        path = tmp_path / "missing" / "output.png"

        with pytest.raises(RenderError, match="Failed to write"):
            plotter.save(plotter.plot(trajectories), path)

        assert not path.exists()

    def test_render_convenience(self, plotter, trajectories, viewport, tmp_path, fake_kaleido):
        path = plotter.render(trajectories, viewport, tmp_path / "chart.png", canvas_size=(640, 480))

        assert path.read_bytes() == FAKE_PNG
        assert fake_kaleido[0]["width"] == 640
        assert fake_kaleido[0]["height"] == 480


# ============================================================================
# Real Raster Export
# ============================================================================


def png_size(data):
    """(width, height) from the IHDR chunk of a PNG byte string."""
    return struct.unpack(">II", data[16:24])


@pytest.mark.skipif(not KALEIDO_AVAILABLE, reason="kaleido not installed")
class TestKaleidoExport:
    """End-to-end PNG export through Kaleido"""

    def test_default_canvas_png(self, plotter, trajectories, viewport, tmp_path, kaleido_usable):
        path = plotter.render(trajectories, viewport, tmp_path / "output.png")

        data = path.read_bytes()
        assert data[:8] == b"\x89PNG\r\n\x1a\n"
        assert png_size(data) == (1280, 960)
        assert [p.name for p in tmp_path.iterdir()] == ["output.png"]
