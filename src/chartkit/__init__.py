"""chartkit public API.

Numeric and interaction engine for interactive bar, line and pie charts:
normalisation of a value series and an optional target overlay, mapping of a
drag position to a data index, and pie slice partitioning with hit testing.

Keep exports minimal; plotting adapters live in ``chartkit.charting.backends``
and ``chartkit.charting.binding`` and are not imported here.
"""

from __future__ import annotations

from .charting import (  # noqa: F401
    ChartSession,
    DataPoint,
    Dataset,
    InteractionState,
    NormalizedSeries,
    PieSlice,
    Point,
    Rect,
)
from .services import ChartEvent, ChartSettings, EventBus  # noqa: F401

__all__ = [
    "ChartSession",
    "DataPoint",
    "Dataset",
    "InteractionState",
    "NormalizedSeries",
    "PieSlice",
    "Point",
    "Rect",
    "ChartEvent",
    "ChartSettings",
    "EventBus",
]
