"""Pie slice partitioning and point-in-wedge hit testing.

Angles are in degrees, measured from 12 o'clock and increasing clockwise on
screen (y axis pointing down). Slices are built in dataset order starting at
0 degrees, so a pointer angle from ``degree_for_point`` can be compared
directly with slice boundaries.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from chartkit.services.settings_service import ChartSettings

from .dataset import Dataset
from .interaction import IDLE_INDEX, InteractionState

__all__ = [
    "Point",
    "Rect",
    "PieSlice",
    "slices",
    "is_point_in_circle",
    "degree_for_point",
    "slice_index_for_degree",
    "emphasis_for_slice",
    "PieInteractionMapper",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def inscribed_radius(self) -> float:
        return min(self.width, self.height) / 2.0


@dataclass(frozen=True)
class PieSlice:
    start_degree: float
    end_degree: float
    value: float

    @property
    def span(self) -> float:
        return self.end_degree - self.start_degree


def slices(
    data: Union[Dataset, Iterable[float]], *, snap_final: bool | None = None
) -> List[PieSlice]:
    """Partition the values into consecutive wedges covering 360 degrees.

    A zero total is replaced by 1 as denominator, so all-zero data yields
    degenerate wedges (``start == end``) instead of a division error. With
    ``snap_final`` (default from settings) the last wedge of a non-zero total
    ends at exactly 360.0.
    """
    values = data.values() if isinstance(data, Dataset) else [float(v) for v in data]
    if snap_final is None:
        snap_final = ChartSettings.instance.pie_snap_final_slice
    total = sum(values)
    denominator = total if total != 0 else 1.0
    if total == 0 and values:
        log.debug("pie total is zero; %d degenerate slices", len(values))
    out: List[PieSlice] = []
    last_end = 0.0
    for value in values:
        end = last_end + (value / denominator) * 360.0
        out.append(PieSlice(last_end, end, value))
        last_end = end
    if snap_final and out and total != 0:
        last = out[-1]
        out[-1] = PieSlice(last.start_degree, 360.0, last.value)
    return out


def is_point_in_circle(point: Point, rect: Rect) -> bool:
    """True when ``point`` lies inside (or on) the circle inscribed in ``rect``."""
    center = rect.center
    return math.hypot(point.x - center.x, point.y - center.y) <= rect.inscribed_radius


def degree_for_point(point: Point, rect: Rect) -> float:
    """Angle of ``point`` around the rect centre in ``[0, 360)``."""
    center = rect.center
    dx = point.x - center.x
    dy = point.y - center.y
    degree = math.degrees(math.atan2(dx, -dy)) % 360.0
    # -0.0 % 360 and tiny negatives can round up to 360.0
    return 0.0 if degree >= 360.0 else degree


def slice_index_for_degree(pie: Sequence[PieSlice], degree: float) -> int:
    """Index of the first slice strictly containing ``degree``, else -1."""
    for i, s in enumerate(pie):
        if s.start_degree < degree < s.end_degree:
            return i
    return IDLE_INDEX


def emphasis_for_slice(index: int, active_index: int, *, scale: float | None = None) -> float:
    if scale is None:
        scale = ChartSettings.instance.pie_emphasis_scale
    return scale if index == active_index and active_index != IDLE_INDEX else 1.0


class PieInteractionMapper:
    """Drag handling for a pie chart; shares ``InteractionState`` with labels."""

    def __init__(self, state: InteractionState | None = None) -> None:
        self.state = state if state is not None else InteractionState()

    def on_drag_changed(
        self, point: Point, rect: Rect, dataset: Dataset, *, snap_final: bool | None = None
    ) -> bool:
        """Hit test ``point``; returns True if the active slice changed."""
        index = IDLE_INDEX
        if is_point_in_circle(point, rect):
            pie = slices(dataset, snap_final=snap_final)
            index = slice_index_for_degree(pie, degree_for_point(point, rect))
        if index == self.state.active_index:
            return False
        st = self.state
        st.active_index = index
        st.in_progress = index != IDLE_INDEX
        if index != IDLE_INDEX:
            hit = dataset.point(index)
            st.current_value = hit.value
            st.current_target = hit.target
            st.current_label = hit.label
        log.debug("pie active slice -> %d", index)
        return True

    def on_drag_ended(self) -> None:
        self.state.reset()
