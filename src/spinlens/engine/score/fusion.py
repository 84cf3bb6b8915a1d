"""Fuse component scores into one heuristic 0-100 probability per symbol."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from spinlens.config.schema import DEFAULT_CONFIG, AnalysisConfig
from spinlens.engine.stats import (
    CombinationSource,
    CombinationStats,
    StreakBreakStats,
    SymbolStatistics,
    current_streak,
)
from spinlens.utils.logger import get_logger

from .components import combination_score, frequency_score, hot_cold_score, trend_score

logger = get_logger(__name__)

UNSEEN_COMBINATION_CAP = 15.0
STREAK_PENALTY_CAP = 35.0
STREAK_PENALTY_FACTOR = 0.8
PROBABILITY_FLOOR = 5.0

# (minimum history length, confidence), checked from the top.
CONFIDENCE_STEPS = ((50, 0.9), (30, 0.75), (15, 0.6), (5, 0.4))
BASE_CONFIDENCE = 0.2
COMBINATION_CONFIDENCE_BONUS = 0.1
MAX_CONFIDENCE = 0.95


@dataclass(frozen=True)
class ProbabilityAnalysis:
    """Fused score and its components for one symbol."""

    symbol: int
    probability: float
    frequency_score: float
    hot_cold_score: float
    trend_score: float
    confidence: float
    combination_score: float
    combination_source: CombinationSource | None
    combination_count: int
    combination_prefix: tuple[int, ...] = ()


def base_confidence(total_spins: int) -> float:
    """Step function of history length."""
    for minimum, confidence in CONFIDENCE_STEPS:
        if total_spins >= minimum:
            return confidence
    return BASE_CONFIDENCE


def streak_penalty(stats: StreakBreakStats, streak: int) -> float:
    """Penalty for a symbol already ``streak`` outcomes into a run."""
    item = stats.break_at(streak)
    if item is not None:
        share = item.percentage
    else:
        share = stats.cumulative_break_percentage(streak) * 0.5
    return min(STREAK_PENALTY_CAP, share * STREAK_PENALTY_FACTOR)


class ProbabilityFuser:
    """Combine frequency, hot/cold, trend and n-gram signals per symbol.

    When the history is non-empty the n-gram share is the probability; the
    weighted blend of the other three components only applies to an empty
    history. A symbol on a running streak is then penalised by how often its
    runs historically ended at that length.
    """

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def analyze(
        self,
        statistics: Sequence[SymbolStatistics],
        symbols: Sequence[int],
        combination_stats: CombinationStats,
        streak_stats: Sequence[StreakBreakStats] = (),
    ) -> list[ProbabilityAnalysis]:
        streaks_by_symbol = {item.symbol: item for item in streak_stats}
        return [
            self._analyze_symbol(stats, symbols, combination_stats, streaks_by_symbol.get(stats.symbol))
            for stats in statistics
        ]

    def _analyze_symbol(
        self,
        stats: SymbolStatistics,
        symbols: Sequence[int],
        combination_stats: CombinationStats,
        streak_stats: StreakBreakStats | None,
    ) -> ProbabilityAnalysis:
        total_spins = len(symbols)
        frequency = frequency_score(stats, total_spins)
        hot_cold = hot_cold_score(stats, symbols, self.config.recent_window_size)
        trend = trend_score(stats, symbols)
        combination = combination_score(stats.symbol, symbols, combination_stats)

        if total_spins >= 1 and combination.source is not None:
            probability = combination.score
            if probability == 0:
                probability = min(UNSEEN_COMBINATION_CAP, frequency * 0.5)
        else:
            probability = (
                frequency * self.config.frequency_weight
                + hot_cold * self.config.hot_cold_weight
                + trend * self.config.trend_weight
            )

        streak = current_streak(symbols, stats.symbol)
        if streak >= 1 and streak_stats is not None and streak_stats.break_distribution:
            penalty = streak_penalty(streak_stats, streak)
            probability = max(PROBABILITY_FLOOR, probability - penalty)
            logger.debug("Symbol %s on a %d-long streak, penalty %.2f.", stats.symbol, streak, penalty)

        confidence = base_confidence(total_spins)
        if total_spins >= 1 and combination.count > 0:
            confidence = min(MAX_CONFIDENCE, confidence + COMBINATION_CONFIDENCE_BONUS)

        return ProbabilityAnalysis(
            symbol=stats.symbol,
            probability=probability,
            frequency_score=frequency,
            hot_cold_score=hot_cold,
            trend_score=trend,
            confidence=confidence,
            combination_score=combination.score,
            combination_source=combination.source,
            combination_count=combination.count,
            combination_prefix=combination.prefix,
        )
