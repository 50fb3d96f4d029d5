"""Derived-value computations over a dataset.

Pure functions: nothing here stores state. ``normalize_dataset`` bundles the
results into a ``NormalizedSeries`` snapshot, recomputed on every call.

Empty-data policy: every min/max reduction over an empty sequence yields 0.0
so an empty dataset renders as a flat zero line instead of failing.

The target series is treated as absent when all of its entries are zero. In
that case it does not take part in the domain bounds or the normalized range,
which keeps a chart without an overlay from compressing its value range to
make room for a meaningless zero line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from .dataset import Dataset

__all__ = [
    "NormalizedSeries",
    "safe_min",
    "safe_max",
    "scale",
    "normalize",
    "domain_min",
    "domain_max",
    "normalized_range",
    "is_negative_domain",
    "bar_max_value",
    "normalize_dataset",
]

log = logging.getLogger(__name__)


def safe_min(seq: Sequence[float]) -> float:
    return min(seq) if seq else 0.0


def safe_max(seq: Sequence[float]) -> float:
    return max(seq) if seq else 0.0


def _present(targets: Sequence[float]) -> bool:
    return any(t != 0 for t in targets)


def scale(values: Sequence[float], targets: Sequence[float]) -> float:
    """Common divisor for both series.

    Never below 1.0, so near-zero datasets are not over-amplified and the
    division in ``normalize`` is always defined.
    """
    max_value = safe_max([abs(v) for v in values])
    max_target = safe_max([abs(t) for t in targets])
    return max(1.0, max_value, max_target)


def normalize(series: Sequence[float], factor: float) -> List[float]:
    return [v / factor for v in series]


def domain_min(values: Sequence[float], targets: Sequence[float]) -> float:
    if _present(targets):
        return safe_min(list(values) + list(targets))
    return safe_min(values)


def domain_max(values: Sequence[float], targets: Sequence[float]) -> float:
    if _present(targets):
        return safe_max(list(values) + list(targets))
    return safe_max(values)


def normalized_range(
    normalized_values: Sequence[float], normalized_targets: Sequence[float]
) -> float:
    """Vertical extent of the normalized drawing space.

    ``max(values) - min(values)``, widened downwards to the target minimum
    when a target overlay is present.
    """
    if not normalized_values:
        return 0.0
    effective_min = safe_min(normalized_values)
    if _present(normalized_targets):
        effective_min = min(effective_min, safe_min(normalized_targets))
    return safe_max(normalized_values) - effective_min


def is_negative_domain(values: Sequence[float]) -> bool:
    """True iff at least one primary value is negative; targets are ignored."""
    return safe_min(values) < 0


def bar_max_value(values: Sequence[float]) -> float:
    """Largest bar value, or 1.0 for empty data or a maximum of exactly 0."""
    if not values:
        return 1.0
    top = max(values)
    return top if top != 0 else 1.0


@dataclass(frozen=True)
class NormalizedSeries:
    normalized_values: List[float]
    normalized_targets: List[float]
    scale: float
    domain_min: float
    domain_max: float
    range: float
    is_negative_domain: bool
    has_targets: bool


def normalize_dataset(dataset: Dataset) -> NormalizedSeries:
    values = dataset.values()
    targets = dataset.targets()
    if not values:
        log.debug("normalizing empty dataset; all derived values fall back to 0.0")
        return NormalizedSeries([], [], 1.0, 0.0, 0.0, 0.0, False, False)
    factor = scale(values, targets)
    norm_values = normalize(values, factor)
    norm_targets = normalize(targets, factor)
    return NormalizedSeries(
        normalized_values=norm_values,
        normalized_targets=norm_targets,
        scale=factor,
        domain_min=domain_min(values, targets),
        domain_max=domain_max(values, targets),
        range=normalized_range(norm_values, norm_targets),
        is_negative_domain=is_negative_domain(values),
        has_targets=_present(targets),
    )
