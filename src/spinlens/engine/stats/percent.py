"""Exact percentages and sum-to-100 normalization."""

from __future__ import annotations

from dataclasses import replace
from typing import Protocol, TypeVar

EMPTY_GROUP_THRESHOLD = 0.01
FLOAT_NOISE = 1e-10


class CountedShare(Protocol):
    count: int
    percentage: float


T = TypeVar("T", bound=CountedShare)


def exact_percent(count: float, total: float) -> float:
    """Return 100 * count / total without rounding (0 when total <= 0)."""
    if total <= 0:
        return 0.0
    return (count / total) * 100


def normalize_percentages(items: list[T]) -> list[T]:
    """Return items whose percentages sum to exactly 100.

    The float remainder goes to the item with the largest count; the first
    such item wins ties. Groups without any observations are returned as-is.
    """
    if not items:
        return list(items)

    total = sum(item.percentage for item in items)
    if total < EMPTY_GROUP_THRESHOLD:
        return list(items)

    diff = 100 - total
    if abs(diff) < FLOAT_NOISE:
        return list(items)

    largest = 0
    for index, item in enumerate(items):
        if item.count > items[largest].count:
            largest = index

    adjusted = list(items)
    adjusted[largest] = replace(items[largest], percentage=items[largest].percentage + diff)
    return adjusted
