"""Chart dataset: ordered (label, value, target) points.

The dataset is the single source of truth for every derived chart quantity.
Values, targets and labels are always projected from the same stored sequence,
so the parallel series can never drift apart in length. The only mutation is
a wholesale ``replace``; nothing derived is cached.

A target of ``0`` means "no target configured". A column of all-zero targets
is therefore treated as an absent overlay series by the normalizer.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Sequence, Tuple

__all__ = ["DataPoint", "Dataset", "DatasetIndexError", "InvalidDataPointError"]

log = logging.getLogger(__name__)


class DatasetIndexError(IndexError):
    """Raised when a caller addresses a point outside ``[0, len(dataset))``."""


class InvalidDataPointError(ValueError):
    """Raised when an input row cannot be interpreted as a data point."""


@dataclass(frozen=True)
class DataPoint:
    label: str = ""
    value: float = 0.0
    target: float = 0.0


def _is_number(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def _coerce(row: Any) -> DataPoint:
    if isinstance(row, DataPoint):
        return row
    if _is_number(row):
        return DataPoint("", float(row), 0.0)
    if isinstance(row, (tuple, list)) and len(row) in (2, 3):
        label, *numeric = row
        if all(_is_number(x) for x in numeric):
            value, target = (numeric + [0.0])[:2]
            return DataPoint(str(label), float(value), float(target))
    raise InvalidDataPointError(f"Cannot interpret {row!r} as a data point")


class Dataset:
    """Ordered collection of data points driving one chart instance.

    Usage:
        ds = Dataset.from_pairs([("M", 6), ("T", 2)])
        ds.values()   # [6.0, 2.0]
        ds.targets()  # [0.0, 0.0]
    """

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Any] = ()) -> None:
        self._points: Tuple[DataPoint, ...] = tuple(_coerce(p) for p in points)

    # ---------------- Construction ------------------------------------
    @classmethod
    def from_values(cls, values: Iterable[float]) -> "Dataset":
        return cls(values)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, float]]) -> "Dataset":
        return cls((lbl, v) for lbl, v in pairs)

    @classmethod
    def from_triples(cls, triples: Iterable[Tuple[str, float, float]]) -> "Dataset":
        return cls((lbl, v, t) for lbl, v, t in triples)

    @classmethod
    def from_any(cls, rows: Iterable[Any]) -> "Dataset":
        """Build from a mixed sequence of numbers, pairs, triples or DataPoints."""
        return cls(rows)

    # ---------------- Mutation ----------------------------------------
    def replace(self, points: Iterable[Any]) -> None:
        """Replace the whole sequence; derived views reflect it on next read."""
        new_points = tuple(_coerce(p) for p in points)
        log.debug("dataset replaced: %d -> %d points", len(self._points), len(new_points))
        self._points = new_points

    # ---------------- Projections -------------------------------------
    def values(self) -> List[float]:
        return [p.value for p in self._points]

    def targets(self) -> List[float]:
        return [p.target for p in self._points]

    def labels(self) -> List[str]:
        return [p.label for p in self._points]

    def has_targets(self) -> bool:
        return any(p.target != 0 for p in self._points)

    # ---------------- Access ------------------------------------------
    def point(self, index: int) -> DataPoint:
        n = len(self._points)
        if not 0 <= index < n:
            raise DatasetIndexError(f"index {index} outside dataset of length {n}")
        return self._points[index]

    @property
    def points(self) -> Sequence[DataPoint]:
        return self._points

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[DataPoint]:
        return iter(self._points)

    def __bool__(self) -> bool:
        return bool(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"Dataset({list(self._points)!r})"
