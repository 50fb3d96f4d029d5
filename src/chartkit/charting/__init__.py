"""Chart numeric core and presentation adapters.

The core (dataset, normalizer, interaction, pie, layout, session) is pure
Python and never touches a plotting library. ``backends``, ``binding`` and
``registry`` wrap matplotlib so charts can be drawn and driven by real
pointer events; they import matplotlib at module import time.
"""

from .dataset import DataPoint, Dataset, DatasetIndexError, InvalidDataPointError  # noqa: F401
from .normalizer import NormalizedSeries, normalize_dataset  # noqa: F401
from .interaction import InteractionMapper, InteractionState, ScaleSize  # noqa: F401
from .pie import PieInteractionMapper, PieSlice, Point, Rect  # noqa: F401
from .session import ChartSession  # noqa: F401
from .types import ChartRequest, ChartResult  # noqa: F401

__all__ = [
    "DataPoint",
    "Dataset",
    "DatasetIndexError",
    "InvalidDataPointError",
    "NormalizedSeries",
    "normalize_dataset",
    "InteractionMapper",
    "InteractionState",
    "ScaleSize",
    "PieInteractionMapper",
    "PieSlice",
    "Point",
    "Rect",
    "ChartSession",
    "ChartRequest",
    "ChartResult",
]
