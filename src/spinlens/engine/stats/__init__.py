"""Descriptive statistics over a spin sequence."""

from .percent import exact_percent, normalize_percentages
from .streaks import (
    StreakBreakItem,
    StreakBreakStats,
    compute_streak_break_stats,
    current_streak,
    split_runs,
)
from .symbols import SymbolStatistics, SymbolStatsCalculator, recent_share
from .transitions import (
    CombinationSource,
    CombinationStats,
    TransitionEntry,
    TransitionTable,
    build_transition_table,
    compute_combination_stats,
)

__all__ = [
    "CombinationSource",
    "CombinationStats",
    "StreakBreakItem",
    "StreakBreakStats",
    "SymbolStatistics",
    "SymbolStatsCalculator",
    "TransitionEntry",
    "TransitionTable",
    "build_transition_table",
    "compute_combination_stats",
    "compute_streak_break_stats",
    "current_streak",
    "exact_percent",
    "normalize_percentages",
    "recent_share",
]
