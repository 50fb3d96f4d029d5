"""Wire matplotlib pointer events to a ChartSession.

A press starts a drag, motion while pressed updates the interaction and a
release ends it. Bar and line charts report the pointer as a fraction of the
axes width; pie charts report the point and the axes rectangle in y-down
screen coordinates, the space ``chartkit.charting.pie`` works in.

After every change the binding refreshes the emphasis (bar size, wedge
radius, indicator line) and a value annotation produced by a
``ValueFormatter``.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .interaction import InteractionState
from .layout import indicator_x
from .pie import Point, Rect
from .session import ChartSession
from .types import ValueFormatter, printf_formatter

__all__ = ["DragBinding", "CHART_KINDS"]

log = logging.getLogger(__name__)

CHART_KINDS = ("bar", "line", "pie")


class DragBinding:
    def __init__(
        self,
        canvas,
        session: ChartSession,
        kind: str,
        *,
        formatter: ValueFormatter = printf_formatter,
        format_tag: Optional[str] = None,
    ) -> None:
        if kind not in CHART_KINDS:
            raise ValueError(f"kind must be one of {CHART_KINDS}, got {kind!r}")
        self.canvas = canvas
        self.session = session
        self.kind = kind
        self._formatter = formatter
        if format_tag is None:
            format_tag = session.settings.label_format
        self._format_tag = format_tag
        self._pressed = False
        self._cids: List[int] = []
        fig = canvas.figure
        self._ax = fig.axes[0]
        self._bars = list(getattr(fig, "_chartkit_bars", ()))
        self._bar_geometry = [(b.get_x(), b.get_width(), b.get_height()) for b in self._bars]
        self._wedges = list(getattr(fig, "_chartkit_wedges", ()))
        self._wedge_radius = [w.r for w in self._wedges]
        self._indicator = None
        self._annotation = self._ax.text(
            0.02, 0.98, "", transform=self._ax.transAxes, va="top", ha="left", visible=False
        )

    # ---------------- Connection --------------------------------------
    def connect(self) -> "DragBinding":
        if self._cids:
            return self
        mpl = self.canvas.mpl_connect
        self._cids = [
            mpl("button_press_event", self.on_press),
            mpl("motion_notify_event", self.on_motion),
            mpl("button_release_event", self.on_release),
        ]
        return self

    def disconnect(self) -> None:
        for cid in self._cids:
            self.canvas.mpl_disconnect(cid)
        self._cids = []

    # ---------------- Event handlers ----------------------------------
    def on_press(self, event) -> None:
        if event.inaxes is not self._ax:
            return
        self._pressed = True
        self._drag(event)

    def on_motion(self, event) -> None:
        if not self._pressed or event.x is None:
            return
        self._drag(event)

    def on_release(self, event) -> None:
        if not self._pressed:
            return
        self._pressed = False
        self.session.on_drag_ended()
        self._refresh()

    # ---------------- Internals ---------------------------------------
    def pointer_fraction(self, event) -> float:
        bbox = self._ax.bbox
        return (event.x - bbox.x0) / bbox.width if bbox.width else -1.0

    def pie_point_and_rect(self, event) -> tuple[Point, Rect]:
        # matplotlib display coordinates grow upwards; pie geometry expects y-down
        fig_height = self.canvas.figure.bbox.height
        bbox = self._ax.bbox
        point = Point(event.x, fig_height - event.y)
        rect = Rect(bbox.x0, fig_height - bbox.y1, bbox.width, bbox.height)
        return point, rect

    def _drag(self, event) -> None:
        if self.kind == "pie":
            point, rect = self.pie_point_and_rect(event)
            changed = self.session.on_pie_drag_changed(point, rect)
        else:
            changed = self.session.on_drag_changed(self.pointer_fraction(event))
        if changed:
            self._refresh()

    def label_text(self, state: InteractionState) -> str:
        if not state.in_progress:
            return ""
        text = self._formatter(state.current_value, self._format_tag)
        if state.current_target > 0:
            text += f" ({int((state.current_value / state.current_target) * 100)}%)"
        if state.current_label:
            text = f"{state.current_label}: {text}"
        return text

    def _refresh(self) -> None:
        state = self.session.current_interaction
        for i, bar in enumerate(self._bars):
            x, width, height = self._bar_geometry[i]
            size = self.session.bar_scale(i)
            bar.set_width(width * size.width)
            bar.set_x(x - (width * size.width - width) / 2.0)
            bar.set_height(height * size.height)
        for i, wedge in enumerate(self._wedges):
            wedge.set_radius(self._wedge_radius[i] * self.session.pie_scale(i))
        if self.kind == "line":
            self._update_indicator(state)
        text = self.label_text(state)
        self._annotation.set_text(text)
        self._annotation.set_visible(bool(text))
        self.canvas.draw_idle()

    def _update_indicator(self, state: InteractionState) -> None:
        n = len(self.session.dataset)
        x: Optional[float] = indicator_x(state.active_index, n, float(max(n - 1, 0)))
        if x is None:
            if self._indicator is not None:
                self._indicator.set_visible(False)
            return
        if self._indicator is None:
            self._indicator = self._ax.axvline(x, linewidth=2, alpha=0.8)
        else:
            self._indicator.set_xdata([x, x])
            self._indicator.set_visible(True)

    @property
    def indicator(self) -> Any:
        return self._indicator
