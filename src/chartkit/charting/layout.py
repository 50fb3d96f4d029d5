"""Geometry the chart views derive from normalized values.

Coordinates are in the view's own pixel space with the origin at the top-left
corner; line points are therefore flipped so larger values sit higher.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

__all__ = ["line_points", "indicator_x", "bar_spacing", "bar_row_height"]


def line_points(
    normalized: Sequence[float],
    normalized_range: float,
    width: float,
    height: float,
    *,
    baseline: float | None = None,
) -> List[Tuple[float, float]]:
    """Polyline vertices for a normalized series.

    Points are spread evenly over ``width`` (step ``width / (n - 1)``) and
    scaled vertically by ``height / normalized_range``, measured from
    ``baseline`` (the series minimum unless given; pass the combined minimum
    when a target overlay widens the range). A single point, or a zero
    range, collapses onto the baseline rather than dividing by zero.
    """
    n = len(normalized)
    if n == 0:
        return []
    step_x = width / (n - 1) if n > 1 else 0.0
    step_y = height / normalized_range if normalized_range else 0.0
    base = min(normalized) if baseline is None else baseline
    return [(i * step_x, height - (v - base) * step_y) for i, v in enumerate(normalized)]


def indicator_x(active_index: int, n: int, width: float) -> Optional[float]:
    """x of the vertical indicator line on a line chart, None when idle."""
    if active_index < 0 or n <= 0 or active_index >= n:
        return None
    if n == 1:
        return 0.0
    return active_index * width / (n - 1)


def bar_spacing(width: float, n: int) -> float:
    return width / (n * 3) if n > 0 else 0.0


def bar_row_height(height: float, is_negative_domain: bool) -> float:
    # negative domains reserve the lower half for bars below the axis
    return height / 2.0 if is_negative_domain else height
