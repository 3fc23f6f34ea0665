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
Color Schemes and Chart Themes

Palettes for trajectory line colors and the layout settings shared by the
chart renderer.

Color assignment is a pure function of the trajectory index: index i gets
palette[i % len(palette)], so the same batch always renders with the same
colors.

Usage
-----
>>> from eulerflow.visualization.themes import ColorSchemes, color_for_index
>>>
>>> color_for_index(5)          # classic palette cycles after 4 colors
'#000000'
>>> ColorSchemes.get_colors('tableau', n_colors=3)
['#4E79A7', '#F28E2B', '#E15759']
"""

from typing import Dict, List, Optional, Tuple

import plotly.graph_objects as go


class ColorSchemes:
    """
    Categorical color palettes for trajectory lines.

    Attributes
    ----------
    CLASSIC : List[str]
        Red, black, blue, green (4 colors, the default)
    PLOTLY : List[str]
        Default Plotly color sequence (10 colors)
    D3 : List[str]
        D3.js Category10 colors (10 colors)
    COLORBLIND_SAFE : List[str]
        Wong palette, colorblind accessible (8 colors)
    TABLEAU : List[str]
        Tableau 10 color palette (10 colors)
    """

    CLASSIC = [
        "#FF0000",  # Red
        "#000000",  # Black
        "#0000FF",  # Blue
        "#00FF00",  # Green
    ]

    PLOTLY = [
        "#636EFA",  # Blue
        "#EF553B",  # Red
        "#00CC96",  # Green
        "#AB63FA",  # Purple
        "#FFA15A",  # Orange
        "#19D3F3",  # Cyan
        "#FF6692",  # Pink
        "#B6E880",  # Light green
        "#FF97FF",  # Light purple
        "#FECB52",  # Yellow
    ]

    D3 = [
        "#1f77b4",  # Blue
        "#ff7f0e",  # Orange
        "#2ca02c",  # Green
        "#d62728",  # Red
        "#9467bd",  # Purple
        "#8c564b",  # Brown
        "#e377c2",  # Pink
        "#7f7f7f",  # Gray
        "#bcbd22",  # Yellow-green
        "#17becf",  # Cyan
    ]

    COLORBLIND_SAFE = [
        "#0173B2",  # Blue
        "#DE8F05",  # Orange
        "#029E73",  # Green
        "#CC78BC",  # Pink
        "#CA9161",  # Tan
        "#949494",  # Gray
        "#ECE133",  # Yellow
        "#56B4E9",  # Sky blue
    ]

    TABLEAU = [
        "#4E79A7",  # Blue
        "#F28E2B",  # Orange
        "#E15759",  # Red
        "#76B7B2",  # Teal
        "#59A14F",  # Green
        "#EDC948",  # Yellow
        "#B07AA1",  # Purple
        "#FF9DA7",  # Pink
        "#9C755F",  # Brown
        "#BAB0AC",  # Gray
    ]

    @staticmethod
    def available() -> List[str]:
        """Names accepted by get_palette() and get_colors()."""
        return ["classic", "plotly", "d3", "colorblind_safe", "tableau"]

    @staticmethod
    def get_palette(scheme: str = "classic") -> List[str]:
        """
        Get a palette by name.

        Raises
        ------
        ValueError
            If scheme name is not recognized
        """
        scheme_lower = scheme.lower().replace("-", "_").replace(" ", "_")

        if scheme_lower == "classic":
            palette = ColorSchemes.CLASSIC
        elif scheme_lower == "plotly":
            palette = ColorSchemes.PLOTLY
        elif scheme_lower == "d3":
            palette = ColorSchemes.D3
        elif scheme_lower in ["colorblind_safe", "wong"]:
            palette = ColorSchemes.COLORBLIND_SAFE
        elif scheme_lower == "tableau":
            palette = ColorSchemes.TABLEAU
        else:
            raise ValueError(
                f"Unknown color scheme '{scheme}'. "
                f"Available: {', '.join(ColorSchemes.available())}"
            )

        return palette.copy()

    @staticmethod
    def get_colors(scheme: str = "classic", n_colors: Optional[int] = None) -> List[str]:
        """
        Get n_colors colors from a palette, cycling when n_colors exceeds it.

        Examples
        --------
        >>> colors = ColorSchemes.get_colors('classic', n_colors=6)
        >>> colors[4] == colors[0]
        True
        """
        palette = ColorSchemes.get_palette(scheme)
        if n_colors is None:
            return palette
        return [palette[i % len(palette)] for i in range(n_colors)]


def color_for_index(index: int, scheme: str = "classic") -> str:
    """
    Color assigned to the trajectory at position index.

    Examples
    --------
    >>> color_for_index(0), color_for_index(4)
    ('#FF0000', '#FF0000')
    """
    palette = ColorSchemes.get_palette(scheme)
    return palette[index % len(palette)]


class PlotThemes:
    """
    Layout settings for trajectory charts.

    Attributes
    ----------
    CLASSIC : dict
        White canvas, gray grid, legend on a translucent white box with a
        black border
    PUBLICATION : dict
        Serif fonts with the colorblind-safe palette
    """

    CLASSIC = {
        "color_scheme": "classic",
        "template": "simple_white",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "line_width": 1.5,
        "grid_color": "#DDDDDD",
        "legend_bgcolor_alpha": 0.8,
        "legend_bordercolor": "#000000",
    }

    PUBLICATION = {
        "color_scheme": "colorblind_safe",
        "template": "simple_white",
        "font_family": "Times New Roman, serif",
        "font_size": 14,
        "line_width": 2.5,
        "grid_color": "#E5E5E5",
        "legend_bgcolor_alpha": 0.8,
        "legend_bordercolor": "#000000",
    }

    @staticmethod
    def get_theme(theme="classic") -> Dict:
        """
        Resolve a theme name or custom dict into a settings dict.

        Custom dicts are layered over CLASSIC, so they only need the keys
        they change.
        """
        if isinstance(theme, str):
            theme_lower = theme.lower()
            if theme_lower == "classic":
                return dict(PlotThemes.CLASSIC)
            if theme_lower == "publication":
                return dict(PlotThemes.PUBLICATION)
            raise ValueError(f"Unknown theme '{theme}'. Available: classic, publication")
        if isinstance(theme, dict):
            return {**PlotThemes.CLASSIC, **theme}
        raise TypeError("theme must be str or dict")

    @staticmethod
    def apply_theme(fig: go.Figure, theme="classic") -> go.Figure:
        """Apply template, fonts, grid, legend styling and line widths to fig."""
        config = PlotThemes.get_theme(theme)

        fig.update_layout(
            template=config["template"],
            font=dict(family=config["font_family"], size=config["font_size"]),
            paper_bgcolor="#FFFFFF",
            plot_bgcolor="#FFFFFF",
            legend=dict(
                bgcolor=with_alpha("#FFFFFF", config["legend_bgcolor_alpha"]),
                bordercolor=config["legend_bordercolor"],
                borderwidth=1,
            ),
        )
        fig.update_xaxes(showgrid=True, gridcolor=config["grid_color"], zeroline=False)
        fig.update_yaxes(showgrid=True, gridcolor=config["grid_color"], zeroline=False)

        for trace in fig.data:
            if hasattr(trace, "line"):
                trace.line.width = config["line_width"]

        return fig


# ============================================================================
# Color Utilities
# ============================================================================


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """
    Convert hex color to RGB tuple.

    Examples
    --------
    >>> hex_to_rgb('#FF0000')
    (255, 0, 0)
    """
    hex_color = hex_color.lstrip("#")
    return tuple(int(hex_color[i : i + 2], 16) for i in (0, 2, 4))


def with_alpha(hex_color: str, alpha: float) -> str:
    """
    Convert a hex color to a Plotly rgba() string.

    Examples
    --------
    >>> with_alpha('#FFFFFF', 0.8)
    'rgba(255, 255, 255, 0.8)'
    """
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"alpha must be in [0, 1], got {alpha}")
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r}, {g}, {b}, {alpha})"


__all__ = [
    "ColorSchemes",
    "PlotThemes",
    "color_for_index",
    "hex_to_rgb",
    "with_alpha",
]
