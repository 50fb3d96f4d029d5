"""Core charting types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from .dataset import Dataset


@dataclass(frozen=True)
class ChartRequest:
    """Represents a logical chart request.

    Attributes:
        chart_type: Identifier registered in the chart registry (e.g. 'bar.basic').
        dataset: Data driving the chart.
        options: Optional rendering hints (title, format, figure size).
    """

    chart_type: str
    dataset: Any
    options: Optional[Dict[str, Any]] = None

    def option(self, key: str, default: Any = None) -> Any:
        return (self.options or {}).get(key, default)


@dataclass
class ChartResult:
    """Represents the outcome of building a chart.

    For the matplotlib backend ``widget`` is the canvas embedding the figure.
    """

    widget: Any  # FigureCanvas (Qt type avoided to keep tests headless)
    meta: Dict[str, Any]


class ValueFormatter(Protocol):  # pragma: no cover - structural only
    """Turns one value plus a format tag into display text."""

    def __call__(self, value: float, tag: str) -> str: ...


def printf_formatter(value: float, tag: str) -> str:
    """Default formatter: ``tag`` is a printf-style numeric pattern."""
    return tag % value


def require_dataset(req: ChartRequest) -> Dataset:
    if not isinstance(req.dataset, Dataset):
        raise TypeError(f"{req.chart_type} expects a Dataset, got {type(req.dataset).__name__}")
    return req.dataset
