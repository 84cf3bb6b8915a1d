"""Run-length ("streak") break statistics."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import groupby

import numpy as np

from spinlens.data.models import SYMBOLS

from .percent import exact_percent, normalize_percentages


@dataclass(frozen=True)
class StreakBreakItem:
    """How many runs ended at exactly ``streak_length``."""

    streak_length: int
    count: int
    percentage: float


@dataclass(frozen=True)
class StreakBreakStats:
    """Run-length distribution for one symbol, sorted by share descending."""

    symbol: int
    break_distribution: tuple[StreakBreakItem, ...]
    total_streaks: int
    average_streak_length: float
    most_common_break_after: int
    max_observed_streak: int

    def break_at(self, streak_length: int) -> StreakBreakItem | None:
        for item in self.break_distribution:
            if item.streak_length == streak_length:
                return item
        return None

    def cumulative_break_percentage(self, streak_length: int) -> float:
        """Summed share of runs that ended at or before ``streak_length``."""
        return sum(item.percentage for item in self.break_distribution if item.streak_length <= streak_length)


def split_runs(symbols: Sequence[int]) -> list[tuple[int, int]]:
    """Return maximal runs as ``(symbol, length)`` pairs in order."""
    return [(symbol, sum(1 for _ in group)) for symbol, group in groupby(symbols)]


def current_streak(symbols: Sequence[int], symbol: int) -> int:
    """Length of the run of ``symbol`` at the end of the sequence."""
    streak = 0
    for value in reversed(symbols):
        if value != symbol:
            break
        streak += 1
    return streak


def compute_streak_break_stats(symbols: Sequence[int]) -> list[StreakBreakStats]:
    """Break distribution per symbol; the trailing run counts as finished."""
    lengths_by_symbol: dict[int, list[int]] = {symbol: [] for symbol in SYMBOLS}
    for symbol, length in split_runs(symbols):
        if symbol in lengths_by_symbol:
            lengths_by_symbol[symbol].append(length)

    return [_summarize(symbol, lengths_by_symbol[symbol]) for symbol in SYMBOLS]


def _summarize(symbol: int, lengths: list[int]) -> StreakBreakStats:
    total_streaks = len(lengths)
    max_observed = max(lengths) if lengths else 0
    average = float(np.mean(lengths)) if lengths else 0.0

    counts = Counter(lengths)
    distribution: list[StreakBreakItem] = []
    most_common = 1
    best_count = 0
    for length in range(1, max_observed + 1):
        count = counts.get(length, 0)
        distribution.append(
            StreakBreakItem(streak_length=length, count=count, percentage=exact_percent(count, total_streaks))
        )
        if count > best_count:
            best_count = count
            most_common = length

    distribution = normalize_percentages(distribution)
    distribution.sort(key=lambda item: item.percentage, reverse=True)

    return StreakBreakStats(
        symbol=symbol,
        break_distribution=tuple(distribution),
        total_streaks=total_streaks,
        average_streak_length=average,
        most_common_break_after=most_common,
        max_observed_streak=max_observed,
    )
