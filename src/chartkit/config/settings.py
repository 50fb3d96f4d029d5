"""Global defaults for chart interaction and geometry."""

from __future__ import annotations

import os
from typing import Final


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# Bar cell under the pointer grows horizontally more than vertically
BAR_EMPHASIS_WIDTH: Final = _env_float("CHARTKIT_BAR_EMPHASIS_WIDTH", 1.4)
BAR_EMPHASIS_HEIGHT: Final = _env_float("CHARTKIT_BAR_EMPHASIS_HEIGHT", 1.1)
PIE_EMPHASIS_SCALE: Final = _env_float("CHARTKIT_PIE_EMPHASIS_SCALE", 1.1)

# Force the last pie slice to end at exactly 360 degrees
PIE_SNAP_FINAL_SLICE: Final = _env_flag("CHARTKIT_PIE_SNAP_FINAL_SLICE", True)

DEFAULT_LABEL_FORMAT: Final = os.environ.get("CHARTKIT_LABEL_FORMAT", "%.01f")
LOG_BUFFER_CAPACITY: Final = int(_env_float("CHARTKIT_LOG_BUFFER_CAPACITY", 500))
