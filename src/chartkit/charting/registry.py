"""Chart registry.

Maps logical chart types (``bar.basic``, ``line.basic``, ``pie.basic``) to
builder callables so callers request charts without touching the backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Callable, Dict

from . import normalizer
from .backends import MatplotlibChartBackend
from .pie import slices
from .types import ChartRequest, ChartResult, require_dataset

__all__ = ["ChartType", "ChartRegistry", "chart_registry", "register_chart_type"]

log = logging.getLogger(__name__)

Builder = Callable[[ChartRequest, MatplotlibChartBackend], ChartResult]


@dataclass
class ChartType:
    """Metadata for a registered chart type."""

    chart_type: str
    builder: Builder
    description: str


class ChartRegistry:
    def __init__(self, backend: MatplotlibChartBackend | None = None) -> None:
        self._types: Dict[str, ChartType] = {}
        self._backend = backend if backend is not None else MatplotlibChartBackend()
        for name, builder, description in _BUILTINS:
            self.register(name, builder, description)

    @property
    def backend(self) -> MatplotlibChartBackend:
        return self._backend

    def register(self, chart_type: str, builder: Builder, description: str) -> None:
        if chart_type in self._types:
            raise ValueError(f"Chart type already registered: {chart_type}")
        self._types[chart_type] = ChartType(chart_type, builder, description)

    def build(self, req: ChartRequest) -> ChartResult:
        """Eagerly build the requested chart and record build duration (ms)."""
        ct = self._types.get(req.chart_type)
        if ct is None:
            raise KeyError(f"Unknown chart type: {req.chart_type}")
        start = perf_counter()
        result = ct.builder(req, self._backend)
        elapsed = (perf_counter() - start) * 1000.0
        result.meta.setdefault("build_ms", elapsed)
        log.debug("built %s in %.1f ms", req.chart_type, elapsed)
        return result

    def list_types(self) -> Dict[str, str]:
        return {k: v.description for k, v in self._types.items()}

    def export(self, result: ChartResult, path: str, *, format: str = "png", dpi: int = 120) -> None:
        self._backend.export_widget(result.widget, path, format=format, dpi=dpi)


# ---------------- Built-in chart types ----------------------------------


def _bar_builder(req: ChartRequest, backend: MatplotlibChartBackend) -> ChartResult:
    dataset = require_dataset(req)
    series = normalizer.normalize_dataset(dataset)
    widget = backend.create_bar_chart(series, labels=dataset.labels(), title=req.option("title"))
    meta = {
        "points": len(dataset),
        "series": series,
        "bar_max": normalizer.bar_max_value(dataset.values()),
    }
    return ChartResult(widget=widget, meta=meta)


def _line_builder(req: ChartRequest, backend: MatplotlibChartBackend) -> ChartResult:
    dataset = require_dataset(req)
    series = normalizer.normalize_dataset(dataset)
    widget = backend.create_line_chart(series, title=req.option("title"))
    return ChartResult(widget=widget, meta={"points": len(dataset), "series": series})


def _pie_builder(req: ChartRequest, backend: MatplotlibChartBackend) -> ChartResult:
    dataset = require_dataset(req)
    pie = slices(dataset, snap_final=req.option("snap_final"))
    widget = backend.create_pie_chart(pie, title=req.option("title"))
    return ChartResult(widget=widget, meta={"points": len(dataset), "slices": pie})


_BUILTINS = (
    ("bar.basic", _bar_builder, "Bar chart with optional target overlay"),
    ("line.basic", _line_builder, "Line chart with optional target line"),
    ("pie.basic", _pie_builder, "Pie chart, one slice per point"),
)


chart_registry = ChartRegistry()


def register_chart_type(chart_type: str, builder: Builder, description: str) -> None:
    """Register a custom chart type on the shared registry."""
    chart_registry.register(chart_type, builder, description)
