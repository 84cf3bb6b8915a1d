"""Recommendation ranking and reason synthesis."""

from .recommender import (
    REASON_RULES,
    ReasonContext,
    ReasonRule,
    Recommendation,
    RecommendationBuilder,
    streak_context,
)

__all__ = [
    "REASON_RULES",
    "ReasonContext",
    "ReasonRule",
    "Recommendation",
    "RecommendationBuilder",
    "streak_context",
]
