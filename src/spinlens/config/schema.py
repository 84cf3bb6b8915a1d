"""Pydantic schema for analysis configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from spinlens.utils.logger import get_logger

logger = get_logger(__name__)

WEIGHT_SUM_TOLERANCE = 0.5


class AnalysisConfig(BaseModel):
    """Validated, immutable analysis settings with defaults."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    recent_window_size: int = Field(default=15, gt=0)
    hot_threshold: float = Field(default=0.35, ge=0.0, le=1.0)
    cold_threshold: float = Field(default=0.1, ge=0.0, le=1.0)

    frequency_weight: float = Field(default=0.6, ge=0.0)
    hot_cold_weight: float = Field(default=0.2, ge=0.0)
    trend_weight: float = Field(default=0.2, ge=0.0)

    @model_validator(mode="after")
    def _warn_on_unbalanced_weights(self) -> AnalysisConfig:
        total = self.frequency_weight + self.hot_cold_weight + self.trend_weight
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            logger.warning("Score weights sum to %.3f; blended scores will not stay on a 0-100 scale.", total)
        return self


DEFAULT_CONFIG = AnalysisConfig()
