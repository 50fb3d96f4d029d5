"""Pointer-to-index mapping for bar and line charts.

The presentation layer converts a drag position to a fraction of the chart
width (``x / width``) and feeds it to ``InteractionMapper``. The mapper keeps a
two-state machine:

    Idle    pointer_fraction == -1, active_index == -1, in_progress False
    Active  in_progress True, active_index in [0, n)

Fractions outside ``[0, 1)`` are clamped onto the first/last cell rather than
rejected. The cell index uses ``floor`` so the boundary between cell ``i`` and
``i + 1`` sits exactly at ``(i + 1) / n``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import NamedTuple, Optional

from chartkit.services.settings_service import ChartSettings

from .dataset import Dataset

__all__ = [
    "IDLE_FRACTION",
    "IDLE_INDEX",
    "InteractionState",
    "InteractionMapper",
    "ScaleSize",
    "NEUTRAL_SCALE",
    "index_for_fraction",
    "scale_factor_for_index",
]

log = logging.getLogger(__name__)

IDLE_FRACTION = -1.0
IDLE_INDEX = -1


class ScaleSize(NamedTuple):
    width: float
    height: float


NEUTRAL_SCALE = ScaleSize(1.0, 1.0)


@dataclass
class InteractionState:
    """Current interaction record read by value labels.

    ``pointer_fraction`` keeps the raw fraction reported by the last drag
    event, which may lie outside ``[0, 1]`` while the finger is off the chart.
    """

    pointer_fraction: float = IDLE_FRACTION
    active_index: int = IDLE_INDEX
    current_value: float = 0.0
    current_target: float = 0.0
    current_label: str = ""
    in_progress: bool = False

    @property
    def is_idle(self) -> bool:
        return not self.in_progress

    def reset(self) -> None:
        self.pointer_fraction = IDLE_FRACTION
        self.active_index = IDLE_INDEX
        self.in_progress = False

    def snapshot(self) -> "InteractionState":
        return replace(self)


def index_for_fraction(fraction: float, n: int) -> Optional[int]:
    """Clamp ``floor(fraction * n)`` into ``[0, n - 1]``.

    Returns None when there is no cell to map to (``n == 0``) or the fraction
    is NaN.
    """
    if n <= 0 or math.isnan(fraction):
        return None
    if math.isinf(fraction):
        return n - 1 if fraction > 0 else 0
    return max(0, min(n - 1, math.floor(fraction * n)))


def scale_factor_for_index(
    fraction: float,
    index: int,
    n: int,
    *,
    emphasized: ScaleSize | None = None,
    neutral: ScaleSize = NEUTRAL_SCALE,
) -> ScaleSize:
    """Size multiplier for bar cell ``index`` given the pointer fraction.

    The cell under the pointer (``index / n <= fraction < (index + 1) / n``)
    gets the emphasized size, every other cell the neutral one.
    """
    if emphasized is None:
        settings = ChartSettings.instance
        emphasized = ScaleSize(settings.bar_emphasis_width, settings.bar_emphasis_height)
    if n <= 0:
        return neutral
    if index / n <= fraction < (index + 1) / n:
        return emphasized
    return neutral


class InteractionMapper:
    """Drag-gesture state machine for one bar or line chart instance."""

    def __init__(self, state: InteractionState | None = None) -> None:
        self.state = state if state is not None else InteractionState()

    def on_drag_changed(self, fraction: float, dataset: Dataset) -> bool:
        """Move the pointer; returns True if the interaction state changed.

        An empty dataset (or a NaN fraction) leaves the state untouched.
        """
        index = index_for_fraction(fraction, len(dataset))
        if index is None:
            log.debug("drag ignored: fraction=%r points=%d", fraction, len(dataset))
            return False
        point = dataset.point(index)
        before = self.state.snapshot()
        st = self.state
        st.pointer_fraction = fraction
        st.active_index = index
        st.current_value = point.value
        st.current_target = point.target
        st.current_label = point.label
        st.in_progress = True
        if not before.in_progress:
            log.debug("interaction started at index %d", index)
        return st != before

    def on_drag_ended(self) -> None:
        if self.state.in_progress:
            log.debug("interaction ended at index %d", self.state.active_index)
        self.state.reset()

    def scale_for(self, index: int, n: int) -> ScaleSize:
        """Emphasis for cell ``index`` at the current pointer position."""
        return scale_factor_for_index(self.state.pointer_fraction, index, n)
