"""Plotly scatter plot of two eyepiece fields.

Hovering a point shows the eyepiece brand, model, and focal length.
"""

import dataclasses
import math
from collections.abc import Sequence
from typing import Any

import plotly.graph_objects as go

from eyepieceguide.models import PlotSpec

_POINT_COLOR = "#1f77b4"
_POINT_SIZE = 14  # Diameter in px (radius 7)
_POINT_OPACITY = 0.3


def is_plottable(value: Any) -> bool:
    """Finite real numbers only. None, NaN, ±inf, and text are skipped."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _hover_text(row: dict[str, Any]) -> str:
    fl = row.get("focal_length_nominal")
    fl_str = f"{fl:g}" if is_plottable(fl) else "?"
    return f"{row.get('brand') or ''} {row.get('model') or ''} {fl_str} mm".strip()


def _axis_range(
    values: list[float], lo: float | None, hi: float | None
) -> list[float] | None:
    """Explicit bounds win; otherwise fall back to the data extent."""
    if not values and (lo is None or hi is None):
        return None
    return [
        min(values) if lo is None else lo,
        max(values) if hi is None else hi,
    ]


def render_scatter(
    rows: Sequence[dict[str, Any]],
    x_key: str,
    y_key: str,
    x_label: str | None = None,
    y_label: str | None = None,
    x_min: float | None = None,
    x_max: float | None = None,
    y_min: float | None = None,
    y_max: float | None = None,
) -> go.Figure:
    """Render a scatter plot of rows[x_key] against rows[y_key].

    Rows where either value is missing or not a finite number are left out.
    An empty selection still produces a figure with labelled axes.

    Args:
        rows: Eyepiece rows as produced by EyepieceRecord.to_row().
        x_key: Field plotted on the x axis.
        y_key: Field plotted on the y axis.
        x_label: Axis title; the field name when None.
        y_label: Axis title; the field name when None.
        x_min, x_max, y_min, y_max: Axis bounds; None = data min/max.

    Returns:
        Plotly Figure object.
    """
    points = [
        r for r in rows if is_plottable(r.get(x_key)) and is_plottable(r.get(y_key))
    ]
    x_vals = [float(r[x_key]) for r in points]
    y_vals = [float(r[y_key]) for r in points]

    trace = go.Scatter(
        x=x_vals,
        y=y_vals,
        mode="markers",
        marker=dict(
            size=_POINT_SIZE,
            color=_POINT_COLOR,
            opacity=_POINT_OPACITY,
            line=dict(width=0),
        ),
        text=[_hover_text(r) for r in points],
        hovertemplate="%{text}<extra></extra>",
        name="eyepieces",
    )

    fig = go.Figure(data=[trace])
    fig.update_layout(
        showlegend=False,
        margin=dict(l=60, r=30, t=10, b=30),
        height=450,
        hovermode="closest",
    )
    fig.update_xaxes(
        title_text=x_label or x_key, range=_axis_range(x_vals, x_min, x_max)
    )
    fig.update_yaxes(
        title_text=y_label or y_key, range=_axis_range(y_vals, y_min, y_max)
    )
    return fig


class FigurePlot:
    """Plot collaborator that keeps the latest Figure for st.plotly_chart()."""

    def __init__(self) -> None:
        self.figure: go.Figure | None = None

    def render(self, rows: Sequence[dict[str, Any]], spec: PlotSpec) -> None:
        self.figure = render_scatter(rows, **dataclasses.asdict(spec))
