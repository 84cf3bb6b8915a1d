"""Score components and probability fusion."""

from .components import (
    CombinationScore,
    combination_score,
    frequency_score,
    hot_cold_score,
    trend_score,
)
from .fusion import ProbabilityAnalysis, ProbabilityFuser, base_confidence, streak_penalty

__all__ = [
    "CombinationScore",
    "ProbabilityAnalysis",
    "ProbabilityFuser",
    "base_confidence",
    "combination_score",
    "frequency_score",
    "hot_cold_score",
    "streak_penalty",
    "trend_score",
]
