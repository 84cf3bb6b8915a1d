"""Single entry point: full statistical profile of a spin history."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from spinlens.config.schema import DEFAULT_CONFIG, AnalysisConfig
from spinlens.data.models import Observation
from spinlens.engine.ranker import Recommendation, RecommendationBuilder
from spinlens.engine.score import ProbabilityAnalysis, ProbabilityFuser
from spinlens.engine.stats import (
    CombinationStats,
    StreakBreakStats,
    SymbolStatistics,
    SymbolStatsCalculator,
    compute_combination_stats,
    compute_streak_break_stats,
)
from spinlens.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything derived from one history and one config.

    Compared by value; not hashable because the transition tables are dicts.
    """

    __hash__ = None

    total_spins: int
    symbol_stats: tuple[SymbolStatistics, ...]
    probabilities: tuple[ProbabilityAnalysis, ...]
    recommendations: tuple[Recommendation, ...]
    combination_stats: CombinationStats
    streak_break_stats: tuple[StreakBreakStats, ...]


def analyze_history(
    history: Sequence[Observation],
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> AnalysisResult:
    """Recompute every statistic from the full history.

    History order is chronology. The call is pure: no I/O, no clock, no
    state kept between calls.
    """
    symbols = [entry.symbol for entry in history]

    symbol_stats = SymbolStatsCalculator(
        recent_window_size=config.recent_window_size,
        hot_threshold=config.hot_threshold,
        cold_threshold=config.cold_threshold,
    ).calculate(symbols)
    combination_stats = compute_combination_stats(symbols)
    streak_break_stats = compute_streak_break_stats(symbols)
    probabilities = ProbabilityFuser(config).analyze(
        symbol_stats, symbols, combination_stats, streak_break_stats
    )
    recommendations = RecommendationBuilder().build(
        probabilities, symbol_stats, symbols, combination_stats, streak_break_stats
    )

    logger.debug(
        "Analyzed %d spins; top pick %s.",
        len(symbols),
        recommendations[0].symbol if recommendations else None,
    )
    return AnalysisResult(
        total_spins=len(symbols),
        symbol_stats=tuple(symbol_stats),
        probabilities=tuple(probabilities),
        recommendations=tuple(recommendations),
        combination_stats=combination_stats,
        streak_break_stats=tuple(streak_break_stats),
    )
