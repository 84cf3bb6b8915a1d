"""Per-symbol descriptive statistics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from spinlens.data.models import SYMBOLS

from .percent import exact_percent

SHORT_WINDOWS = (5, 10, 20)


@dataclass(frozen=True)
class SymbolStatistics:
    """Counts, recency and short-window shares for one symbol."""

    symbol: int
    count: int
    percentage: float
    last_seen_index: int | None
    average_interval: float
    is_hot: bool
    is_cold: bool
    count_last_5: int
    count_last_10: int
    count_last_20: int
    pct_last_5: float
    pct_last_10: float
    pct_last_20: float


def recent_share(symbols: Sequence[int], symbol: int, window: int) -> float:
    """Share (0..1) of ``symbol`` among the last ``window`` outcomes; 0 for no data."""
    recent = list(symbols[-window:]) if window > 0 else []
    if not recent:
        return 0.0
    return sum(1 for value in recent if value == symbol) / len(recent)


class SymbolStatsCalculator:
    """Compute ``SymbolStatistics`` for every alphabet member."""

    def __init__(
        self,
        recent_window_size: int = 15,
        hot_threshold: float = 0.35,
        cold_threshold: float = 0.1,
    ) -> None:
        if recent_window_size <= 0:
            raise ValueError("recent_window_size must be > 0.")
        if not (0.0 <= hot_threshold <= 1.0 and 0.0 <= cold_threshold <= 1.0):
            raise ValueError("hot_threshold and cold_threshold must be within [0, 1].")

        self.recent_window_size = recent_window_size
        self.hot_threshold = float(hot_threshold)
        self.cold_threshold = float(cold_threshold)

    def calculate(self, symbols: Sequence[int]) -> list[SymbolStatistics]:
        """Return statistics in alphabet order."""
        values = np.asarray(symbols, dtype=np.int64)
        return [self._for_symbol(values, symbol) for symbol in SYMBOLS]

    def _for_symbol(self, values: np.ndarray, symbol: int) -> SymbolStatistics:
        total = len(values)
        positions = np.flatnonzero(values == symbol)
        count = int(positions.size)

        last_seen_index = int(total - 1 - positions[-1]) if count else None
        average_interval = float(np.mean(np.diff(positions))) if count > 1 else 0.0

        share = recent_share(values.tolist(), symbol, self.recent_window_size)
        has_full_window = total >= self.recent_window_size

        window_counts: dict[int, int] = {}
        window_pcts: dict[int, float] = {}
        for window in SHORT_WINDOWS:
            window_count = int(np.count_nonzero(values[-window:] == symbol)) if total else 0
            denominator = min(window, total) if total > 0 else 1
            window_counts[window] = window_count
            window_pcts[window] = exact_percent(window_count, denominator)

        return SymbolStatistics(
            symbol=symbol,
            count=count,
            percentage=exact_percent(count, total),
            last_seen_index=last_seen_index,
            average_interval=average_interval,
            is_hot=share >= self.hot_threshold,
            is_cold=share <= self.cold_threshold and has_full_window,
            count_last_5=window_counts[5],
            count_last_10=window_counts[10],
            count_last_20=window_counts[20],
            pct_last_5=window_pcts[5],
            pct_last_10=window_pcts[10],
            pct_last_20=window_pcts[20],
        )
