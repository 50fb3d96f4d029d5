"""Service layer exports.

Responsibilities:
 - EventBus publish/subscribe core (observer interface of chart sessions)
 - Runtime chart settings
 - Log capture for debug panels and tests
"""

from .event_bus import EventBus, ChartEvent  # noqa: F401
from .logging_service import LoggingService, configure_logging  # noqa: F401
from .settings_service import ChartSettings  # noqa: F401

__all__ = [
    "EventBus",
    "ChartEvent",
    "LoggingService",
    "configure_logging",
    "ChartSettings",
]
