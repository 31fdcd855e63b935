"""Matplotlib static PNG renderer."""

from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from eyepieceguide.models import EyepieceRecord, PlotSpec
from eyepieceguide.renderers.plotly_scatter import is_plottable

_ROOT = Path(__file__).parent.parent.parent.parent


def render_static_plot(
    records: Sequence[EyepieceRecord], spec: PlotSpec = PlotSpec(), chart_size: int = 6
) -> Figure:
    """Render the eyepiece scatter plot as a static matplotlib figure.

    Args:
        records: Eyepiece records to plot.
        spec: Plotted fields, labels, and axis bounds.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    rows = [r.to_row() for r in records]
    points = [
        r for r in rows if is_plottable(r[spec.x_key]) and is_plottable(r[spec.y_key])
    ]
    x_vals = [float(r[spec.x_key]) for r in points]
    y_vals = [float(r[spec.y_key]) for r in points]

    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    ax.scatter(x_vals, y_vals, s=7**2, alpha=0.3, linewidths=0)
    ax.set_xlabel(spec.x_label or spec.x_key)
    ax.set_ylabel(spec.y_label or spec.y_key)

    if x_vals or (spec.x_min is not None and spec.x_max is not None):
        ax.set_xlim(
            spec.x_min if spec.x_min is not None else min(x_vals),
            spec.x_max if spec.x_max is not None else max(x_vals),
        )
    if y_vals or (spec.y_min is not None and spec.y_max is not None):
        ax.set_ylim(
            spec.y_min if spec.y_min is not None else min(y_vals),
            spec.y_max if spec.y_max is not None else max(y_vals),
        )
    ax.grid(alpha=0.2)
    fig.tight_layout()
    return fig


def save_static_plot(
    records: Sequence[EyepieceRecord],
    output_path: Path | None = None,
    spec: PlotSpec = PlotSpec(),
) -> Path:
    """Save the eyepiece scatter plot as a PNG file.

    Args:
        records: Eyepiece records to plot.
        output_path: Destination path. Auto-generated under results/ if None.
        spec: Plotted fields, labels, and axis bounds.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        output_path = _ROOT / "results" / f"eyepieces__{spec.x_key}__{spec.y_key}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_plot(records, spec)
    fig.savefig(output_path)
    plt.close(fig)
    return output_path
