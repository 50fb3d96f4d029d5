"""Runtime chart settings.

Small dataclass bundling the interaction knobs used by the mappers and the
pie geometry. Defaults come from ``chartkit.config.settings`` (which honours
``CHARTKIT_*`` environment variables). Sessions receive an instance
explicitly; ``ChartSettings.instance`` is only the fallback used when the
caller does not pass one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar

from chartkit.config import settings as _defaults


@dataclass(frozen=True)
class ChartSettings:
    """Interaction and geometry settings.

    Attributes:
        bar_emphasis_width: Horizontal scale applied to the bar under the pointer.
        bar_emphasis_height: Vertical scale applied to the bar under the pointer.
        pie_emphasis_scale: Uniform scale applied to the touched pie slice.
        pie_snap_final_slice: When True the last slice ends at exactly 360
            degrees (masks floating point accumulation).
        label_format: printf-style pattern used by the default value formatter.
    """

    # default singleton; tests and application bootstrap may replace it
    instance: ClassVar["ChartSettings"]

    bar_emphasis_width: float = field(default_factory=lambda: _defaults.BAR_EMPHASIS_WIDTH)
    bar_emphasis_height: float = field(default_factory=lambda: _defaults.BAR_EMPHASIS_HEIGHT)
    pie_emphasis_scale: float = field(default_factory=lambda: _defaults.PIE_EMPHASIS_SCALE)
    pie_snap_final_slice: bool = field(default_factory=lambda: _defaults.PIE_SNAP_FINAL_SLICE)
    label_format: str = field(default_factory=lambda: _defaults.DEFAULT_LABEL_FORMAT)

    def with_overrides(self, **changes) -> "ChartSettings":
        return replace(self, **changes)


ChartSettings.instance = ChartSettings()
