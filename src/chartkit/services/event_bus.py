"""Chart notification bus.

Chart sessions announce data and interaction changes here; labels, highlight
overlays and the log panel subscribe. Everything runs on the caller's thread
inside the pointer event that caused the change, so dispatch is a plain loop
over the subscribers registered at publish time.

A handler that raises is recorded in ``errors`` and the remaining handlers
still run. Subscriptions that were cancelled or were one-shot are pruned once
the dispatch loop is done, which lets a handler subscribe or cancel while it
is being called.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import Any, Callable, Deque, Dict, List, NamedTuple

__all__ = [
    "ChartEvent",
    "Event",
    "EventBus",
    "HandlerFailure",
    "Subscription",
    "TraceEntry",
]


class ChartEvent(str, Enum):
    DATA_CHANGED = "data_changed"
    INTERACTION_CHANGED = "interaction_changed"
    INTERACTION_ENDED = "interaction_ended"
    LOG_RECORD_ADDED = "log_record_added"


def _key(name: str | ChartEvent) -> str:
    return name.value if isinstance(name, ChartEvent) else name


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float = field(default_factory=perf_counter)


Handler = Callable[[Event], None]


@dataclass(eq=False)
class Subscription:
    event: str
    handler: Handler
    once: bool = False
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class HandlerFailure(NamedTuple):
    event: Event
    handler: Handler
    error: Exception


@dataclass(frozen=True)
class TraceEntry:
    name: str
    timestamp: float
    summary: str
    delivered: int  # handlers that ran without raising
    failed: int


def _summarize(payload: Any, width: int = 40) -> str:
    if payload is None:
        return "-"
    text = str(payload)
    return text if len(text) <= width else text[: width - 3] + "..."


class EventBus:
    """Synchronous dispatcher for ``ChartEvent`` notifications.

    Usage:
        bus = EventBus()
        sub = bus.subscribe(ChartEvent.DATA_CHANGED, lambda e: redraw(e.payload))
        bus.publish(ChartEvent.DATA_CHANGED, {"count": 3})
        sub.cancel()

    Custom string event names are accepted alongside ``ChartEvent`` members.
    Tracing is off by default; ``enable_tracing`` keeps the newest entries
    in a bounded buffer with per-publish delivery counts.
    """

    DEFAULT_TRACE_CAPACITY = 50

    def __init__(self) -> None:
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[HandlerFailure] = []
        self._traces: Deque[TraceEntry] | None = None

    def subscribe(
        self, name: str | ChartEvent, handler: Handler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        sub.cancel()
        self._prune(sub.event)

    def publish(self, name: str | ChartEvent, payload: Any = None) -> Event:
        evt = Event(name=_key(name), payload=payload)
        delivered = failed = 0
        for sub in list(self._subs.get(evt.name, ())):
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - one bad listener must not stop the rest
                self._errors.append(HandlerFailure(evt, sub.handler, exc))
                failed += 1
                continue
            delivered += 1
            if sub.once:
                sub.cancel()
        self._prune(evt.name)
        if self._traces is not None:
            self._traces.append(
                TraceEntry(evt.name, evt.timestamp, _summarize(payload), delivered, failed)
            )
        return evt

    def _prune(self, key: str) -> None:
        bucket = [s for s in self._subs.get(key, ()) if s.active]
        if bucket:
            self._subs[key] = bucket
        else:
            self._subs.pop(key, None)

    def subscriber_count(self, name: str | ChartEvent) -> int:
        return sum(1 for s in self._subs.get(_key(name), ()) if s.active)

    @property
    def errors(self) -> List[HandlerFailure]:
        return list(self._errors)

    # ---------------- Tracing -----------------------------------------
    def enable_tracing(self, enabled: bool = True, *, capacity: int | None = None) -> None:
        if not enabled:
            self._traces = None
            return
        size = capacity if capacity is not None else self.DEFAULT_TRACE_CAPACITY
        self._traces = deque(self._traces or (), maxlen=size)

    @property
    def tracing_enabled(self) -> bool:
        return self._traces is not None

    def clear_traces(self) -> None:
        if self._traces is not None:
            self._traces.clear()

    def recent_traces(self) -> List[TraceEntry]:
        return list(self._traces or ())
