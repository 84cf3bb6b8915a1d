"""Independent per-symbol score components on a 0-100 scale."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from spinlens.engine.stats import CombinationSource, CombinationStats, SymbolStatistics, recent_share

NEUTRAL_SCORE = 25.0
TREND_WINDOW = 20
HOT_MULTIPLIER = 1.5
COLD_MULTIPLIER = 0.5
COLD_OFFSET = 15.0
COLD_FLOOR = 10.0
RECENCY_BONUS = 20.0
RECENCY_DECAY = 2.0


@dataclass(frozen=True)
class CombinationScore:
    """Share of a symbol after the current tail, from the deepest usable order."""

    score: float
    source: CombinationSource | None
    count: int
    prefix: tuple[int, ...] = ()


def frequency_score(stats: SymbolStatistics, total_spins: int) -> float:
    if total_spins == 0:
        return NEUTRAL_SCORE
    return stats.percentage


def hot_cold_score(stats: SymbolStatistics, symbols: Sequence[int], recent_window: int) -> float:
    """Recent-window share with a hot bonus and a softened cold penalty."""
    if not symbols[-recent_window:]:
        return NEUTRAL_SCORE

    recent_percentage = recent_share(symbols, stats.symbol, recent_window) * 100
    if stats.is_hot:
        return min(recent_percentage * HOT_MULTIPLIER, 100.0)
    if stats.is_cold:
        # Cold symbols keep a floor: they may be "due".
        return max(recent_percentage * COLD_MULTIPLIER + COLD_OFFSET, COLD_FLOOR)
    return recent_percentage


def trend_score(stats: SymbolStatistics, symbols: Sequence[int]) -> float:
    """Linearly recency-weighted share of the last 20 outcomes plus a recency bonus."""
    window = np.asarray(symbols[-TREND_WINDOW:], dtype=np.int64)
    if window.size == 0:
        return NEUTRAL_SCORE

    weights = np.arange(1, window.size + 1, dtype=np.float64)
    weighted_percentage = float(weights[window == stats.symbol].sum() / weights.sum()) * 100

    if stats.last_seen_index is not None:
        bonus = max(0.0, RECENCY_BONUS - stats.last_seen_index * RECENCY_DECAY)
        return min(weighted_percentage + bonus, 100.0)
    return weighted_percentage


def combination_score(
    symbol: int, symbols: Sequence[int], combination_stats: CombinationStats
) -> CombinationScore:
    """Look the symbol up after the last 3, 2 or 1 outcomes.

    The quadruple table is consulted from four outcomes on, the triple table
    from two, the pair table from one. Dense tables always hold the prefix, so
    the first eligible order decides even when that prefix was never seen.
    """
    total = len(symbols)
    for order, minimum_length in ((3, 4), (2, 2), (1, 1)):
        if total < minimum_length:
            continue
        prefix = tuple(symbols[-order:])
        table = combination_stats.table(order)
        if not table.successors(prefix):
            continue
        entry = table.lookup(prefix, symbol)
        return CombinationScore(
            score=entry.percentage if entry else 0.0,
            source=table.source,
            count=entry.count if entry else 0,
            prefix=prefix,
        )
    return CombinationScore(score=0.0, source=None, count=0)
