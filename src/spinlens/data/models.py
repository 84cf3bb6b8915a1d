"""Observation record and the fixed symbol alphabet."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral, Real

# Wheel values, in the order every table enumerates them.
SYMBOLS: tuple[int, ...] = (2, 3, 5, 10)


@dataclass(frozen=True)
class Observation:
    """One recorded spin outcome."""

    id: str
    symbol: int
    timestamp: int


def is_symbol(value: object) -> bool:
    """Return True for alphabet members; bools and fractional numbers are rejected."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Integral):
        return int(value) in SYMBOLS
    if isinstance(value, Real):
        return float(value).is_integer() and int(value) in SYMBOLS
    return False
