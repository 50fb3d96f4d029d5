"""Logging service.

Captures recent ``chartkit`` log records into a ring buffer so a debug panel
(or a test) can inspect what the chart core did, and optionally announces each
record on an EventBus as ``ChartEvent.LOG_RECORD_ADDED``.

Also provides ``configure_logging`` for applications that want console output
in the usual ``time - logger - level - message`` layout.
"""

from __future__ import annotations

import logging
import sys
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, List, Optional

from chartkit.config.settings import LOG_BUFFER_CAPACITY

from .event_bus import ChartEvent, EventBus

__all__ = [
    "LogEntry",
    "LoggingService",
    "configure_logging",
    "PACKAGE_LOGGER",
]

PACKAGE_LOGGER = "chartkit"


def configure_logging(level: int = logging.INFO, stream=None) -> logging.Logger:
    """Attach a console handler to the package logger.

    Calling it again replaces the previous handler instead of stacking a new one.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_chartkit_console", False):
            logger.removeHandler(handler)
    console = logging.StreamHandler(stream or sys.stdout)
    console.setLevel(level)
    console.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )
    console._chartkit_console = True  # type: ignore[attr-defined]
    logger.addHandler(console)
    return logger


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(
        self, capacity: int = LOG_BUFFER_CAPACITY, *, event_bus: EventBus | None = None
    ) -> None:
        self._capacity = capacity
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._event_bus = event_bus
        self._attached = False

    # Lifecycle --------------------------------------------------------
    def attach(self, level: int = logging.DEBUG) -> None:
        if self._attached:
            return
        logger = logging.getLogger(PACKAGE_LOGGER)
        logger.addHandler(self._handler)
        if logger.level == logging.NOTSET or logger.level > level:
            logger.setLevel(level)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        logging.getLogger(PACKAGE_LOGGER).removeHandler(self._handler)
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    # Internal ingestion -----------------------------------------------
    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)
        if self._event_bus is not None:
            self._event_bus.publish(
                ChartEvent.LOG_RECORD_ADDED,
                {"level": entry.level, "name": entry.name, "message": entry.message[:120]},
            )

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
