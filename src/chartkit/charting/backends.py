"""Matplotlib presentation backend.

Draws bar, line and pie charts from values produced by the numeric core. The
figures are wrapped in a canvas class; by default the Qt ``FigureCanvasQTAgg``
so the result can be embedded in a widget tree, but any matplotlib canvas
class can be supplied (tests use the Agg canvas to stay headless).

Rendering here is deliberately plain: no theming, gradients or animation.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Wedge

from .layout import bar_spacing, line_points
from .normalizer import NormalizedSeries
from .pie import PieSlice

__all__ = ["MatplotlibChartBackend", "pie_theta"]

TARGET_ALPHA = 0.3


def pie_theta(degree: float) -> float:
    """Convert a clockwise-from-12-o'clock angle to matplotlib's convention."""
    return 90.0 - degree


class MatplotlibChartBackend:
    def __init__(self, canvas_class: Any = None, *, figsize: tuple[float, float] = (4, 2.2)) -> None:
        self._canvas_class = canvas_class
        self._figsize = figsize

    def _wrap(self, fig: Figure) -> Any:
        canvas_class = self._canvas_class
        if canvas_class is None:
            from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg  # needs a Qt binding

            canvas_class = FigureCanvasQTAgg
        return canvas_class(fig)

    def _figure(self, title: str | None, figsize: tuple[float, float] | None = None):
        fig = Figure(figsize=figsize or self._figsize, tight_layout=True)
        ax = fig.add_subplot(111)
        if title:
            ax.set_title(title)
        return fig, ax

    # --- bar -----------------------------------------------------------
    def create_bar_chart(
        self,
        series: NormalizedSeries,
        *,
        labels: Sequence[str] | None = None,
        title: str | None = None,
    ) -> Any:
        fig, ax = self._figure(title)
        n = len(series.normalized_values)
        x = np.arange(n, dtype=float)
        # cells are one unit wide; a third of each cell is gap
        width = 1.0 - bar_spacing(float(n), n) if n else 1.0
        if series.has_targets:
            ax.bar(x, series.normalized_targets, width=width, alpha=TARGET_ALPHA, gid="targets")
        bars = ax.bar(x, series.normalized_values, width=width, gid="values")
        ax.set_xlim(-0.5, max(n, 1) - 0.5)
        ax.set_ylim(-1.0 if series.is_negative_domain else 0.0, 1.0)
        if labels and any(labels):
            ax.set_xticks(x)
            ax.set_xticklabels(list(labels))
        fig._chartkit_bars = list(bars.patches)  # type: ignore[attr-defined]
        return self._wrap(fig)

    # --- line ----------------------------------------------------------
    def create_line_chart(self, series: NormalizedSeries, *, title: str | None = None) -> Any:
        fig, ax = self._figure(title)
        values = series.normalized_values
        n = len(values)
        baseline = min(values) if values else 0.0
        if series.has_targets and series.normalized_targets:
            baseline = min(baseline, min(series.normalized_targets))
        # unit-height drawing space, flipped back to matplotlib's y-up axes
        pts = line_points(values, series.range, float(max(n - 1, 0)), 1.0, baseline=baseline)
        ax.plot([p[0] for p in pts], [1.0 - p[1] for p in pts], linewidth=2, gid="values")
        if series.has_targets:
            tpts = line_points(
                series.normalized_targets, series.range, float(max(n - 1, 0)), 1.0, baseline=baseline
            )
            ax.plot([p[0] for p in tpts], [1.0 - p[1] for p in tpts], linewidth=2, gid="targets")
        ax.set_xlim(0.0, max(n - 1, 1))
        ax.set_ylim(0.0, 1.0)
        return self._wrap(fig)

    # --- pie -----------------------------------------------------------
    def create_pie_chart(
        self,
        slices: Sequence[PieSlice],
        *,
        title: str | None = None,
        radius: float = 1.0,
    ) -> Any:
        fig, ax = self._figure(title, figsize=(3.2, 3.2))
        wedges = []
        for i, s in enumerate(slices):
            # matplotlib wedges run counterclockwise from theta1 to theta2
            wedge = Wedge(
                (0.0, 0.0),
                radius,
                pie_theta(s.end_degree),
                pie_theta(s.start_degree),
                facecolor=f"C{i % 10}",
                visible=s.span > 0,
                clip_on=False,
            )
            ax.add_patch(wedge)
            wedges.append(wedge)
        ax.set_xlim(-radius, radius)
        ax.set_ylim(-radius, radius)
        ax.set_aspect("equal", adjustable="box")
        ax.set_axis_off()
        fig._chartkit_wedges = wedges  # type: ignore[attr-defined]
        return self._wrap(fig)

    # --- export --------------------------------------------------------
    def export_widget(self, canvas, path: str, *, format: str = "png", dpi: int = 120) -> None:
        fig = getattr(canvas, "figure", None)
        if fig is None:
            raise ValueError("Unsupported canvas type for export")
        if format.lower() not in {"png", "svg"}:
            raise ValueError("format must be 'png' or 'svg'")
        fig.savefig(path, format=format.lower(), dpi=dpi if format.lower() == "png" else None)
