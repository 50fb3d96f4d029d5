"""Chart session: the boundary between the numeric core and a chart view.

One session per chart instance. The presentation layer pushes data and
pointer events in; everything it draws or labels is read back out through
accessors that recompute from the current dataset on every call. Mutations
are announced on the EventBus handed to the session, so views redraw on
notification instead of relying on implicit reactivity.

    bus = EventBus()
    session = ChartSession(event_bus=bus)
    bus.subscribe(ChartEvent.INTERACTION_CHANGED, lambda e: label.update(e.payload))
    session.set_dataset([("M", 6, 0), ("T", 2, 0), ("W", 5, 0)])
    session.on_drag_changed(0.4)   # active_index 1, current_value 2.0
    session.on_drag_ended()
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List

from chartkit.services.event_bus import ChartEvent, EventBus
from chartkit.services.settings_service import ChartSettings

from . import normalizer
from .dataset import Dataset
from .interaction import InteractionMapper, InteractionState, ScaleSize, scale_factor_for_index
from .pie import PieInteractionMapper, PieSlice, Point, Rect, emphasis_for_slice, slices

__all__ = ["ChartSession"]

log = logging.getLogger(__name__)


class ChartSession:
    def __init__(
        self,
        dataset: Dataset | None = None,
        *,
        event_bus: EventBus | None = None,
        settings: ChartSettings | None = None,
    ) -> None:
        self._dataset = dataset if dataset is not None else Dataset()
        self._bus = event_bus
        self._settings = settings if settings is not None else ChartSettings.instance
        self._state = InteractionState()
        # both mappers write to the one state object the labels read
        self._mapper = InteractionMapper(self._state)
        self._pie_mapper = PieInteractionMapper(self._state)

    # ---------------- Inputs ------------------------------------------
    def set_dataset(self, rows: Iterable[Any] | Dataset) -> None:
        """Replace the working dataset wholesale.

        Accepts a Dataset or any rows understood by ``Dataset.from_any``.
        An interaction in progress is ended, since its index may no longer
        point at the same datum.
        """
        points = rows.points if isinstance(rows, Dataset) else rows
        self._dataset.replace(points)
        if self._state.in_progress:
            self.on_drag_ended()
        self._publish(ChartEvent.DATA_CHANGED, {"count": len(self._dataset)})

    def on_drag_changed(self, pointer_fraction: float) -> bool:
        changed = self._mapper.on_drag_changed(pointer_fraction, self._dataset)
        if changed:
            self._publish(ChartEvent.INTERACTION_CHANGED, self.current_interaction)
        return changed

    def on_pie_drag_changed(self, point: Point, rect: Rect) -> bool:
        changed = self._pie_mapper.on_drag_changed(
            point, rect, self._dataset, snap_final=self._settings.pie_snap_final_slice
        )
        if changed:
            self._publish(ChartEvent.INTERACTION_CHANGED, self.current_interaction)
        return changed

    def on_drag_ended(self) -> None:
        self._mapper.on_drag_ended()
        self._publish(ChartEvent.INTERACTION_ENDED, self.current_interaction)

    # ---------------- Outputs -----------------------------------------
    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def settings(self) -> ChartSettings:
        return self._settings

    @property
    def normalized(self) -> normalizer.NormalizedSeries:
        return normalizer.normalize_dataset(self._dataset)

    @property
    def normalized_values(self) -> List[float]:
        return self.normalized.normalized_values

    @property
    def normalized_targets(self) -> List[float]:
        return self.normalized.normalized_targets

    @property
    def domain_range(self) -> float:
        return self.normalized.range

    @property
    def is_negative_domain(self) -> bool:
        return normalizer.is_negative_domain(self._dataset.values())

    @property
    def current_interaction(self) -> InteractionState:
        return self._state.snapshot()

    @property
    def pie_slices(self) -> List[PieSlice]:
        return slices(self._dataset, snap_final=self._settings.pie_snap_final_slice)

    def bar_scale(self, index: int) -> ScaleSize:
        s = self._settings
        return scale_factor_for_index(
            self._state.pointer_fraction,
            index,
            len(self._dataset),
            emphasized=ScaleSize(s.bar_emphasis_width, s.bar_emphasis_height),
        )

    def pie_scale(self, index: int) -> float:
        return emphasis_for_slice(
            index, self._state.active_index, scale=self._settings.pie_emphasis_scale
        )

    # ---------------- Internals ---------------------------------------
    def _publish(self, name: ChartEvent, payload: Any) -> None:
        if self._bus is None:
            return
        self._bus.publish(name, payload)
