from __future__ import annotations

import pytest

from spinlens.config import AnalysisConfig
from spinlens.engine.score.fusion import ProbabilityFuser, base_confidence, streak_penalty
from spinlens.engine.stats import (
    SymbolStatsCalculator,
    compute_combination_stats,
    compute_streak_break_stats,
)


def _analyze(symbols, config=None):
    config = config or AnalysisConfig()
    stats = SymbolStatsCalculator(
        recent_window_size=config.recent_window_size,
        hot_threshold=config.hot_threshold,
        cold_threshold=config.cold_threshold,
    ).calculate(symbols)
    analyses = ProbabilityFuser(config).analyze(
        stats,
        symbols,
        compute_combination_stats(symbols),
        compute_streak_break_stats(symbols),
    )
    return {item.symbol: item for item in analyses}


def test_empty_history_blends_neutral_components():
    analyses = _analyze([])

    for analysis in analyses.values():
        assert analysis.probability == pytest.approx(25.0)
        assert analysis.confidence == pytest.approx(0.2)
        assert analysis.combination_source is None


def test_empty_history_uses_configured_weights():
    config = AnalysisConfig(frequency_weight=0.5, hot_cold_weight=0.0, trend_weight=0.0)

    analyses = _analyze([], config)

    assert analyses[2].probability == pytest.approx(12.5)


def test_combination_share_becomes_probability():
    analyses = _analyze([2, 3, 2, 3, 2, 3, 2, 3])

    assert analyses[2].probability == pytest.approx(100.0)
    assert analyses[2].combination_source == "quadruple"
    assert analyses[2].combination_prefix == (3, 2, 3)
    assert analyses[2].confidence == pytest.approx(0.5)


def test_unseen_combination_gets_frequency_fallback_and_streak_penalty():
    analyses = _analyze([2, 3, 2, 3, 2, 3, 2, 3])

    # 3 never followed 3-2-3: min(15, 50 * 0.5) = 15, then its 1-run always
    # broke, so the 35 penalty lands on the floor of 5.
    assert analyses[3].probability == pytest.approx(5.0)
    assert analyses[3].confidence == pytest.approx(0.4)
    # 5 was never seen: min(15, 0) and no streak.
    assert analyses[5].probability == 0.0


def test_unseen_combination_without_streak_keeps_fallback():
    analyses = _analyze([2, 2, 3, 3, 3, 3, 5, 3, 2])

    # Prefix 5-3-2 was never followed before; half of 3's 56% share caps at 15.
    assert analyses[3].combination_score == 0.0
    assert analyses[3].probability == pytest.approx(15.0)


def test_streak_penalty_uses_share_at_current_length():
    stats = {item.symbol: item for item in compute_streak_break_stats([2, 3, 2, 2, 3, 2, 2])}

    assert streak_penalty(stats[2], 1) == pytest.approx(min(35.0, 100 / 3 * 0.8))
    assert streak_penalty(stats[2], 2) == pytest.approx(35.0)
    # No run ended at 3: half the cumulative share, scaled.
    assert streak_penalty(stats[2], 3) == pytest.approx(min(35.0, 100 * 0.5 * 0.8))


@pytest.mark.parametrize(
    ("total", "expected"),
    [(0, 0.2), (4, 0.2), (5, 0.4), (14, 0.4), (15, 0.6), (29, 0.6), (30, 0.75), (49, 0.75), (50, 0.9)],
)
def test_base_confidence_steps(total, expected):
    assert base_confidence(total) == pytest.approx(expected)


@pytest.mark.parametrize(("length", "expected"), [(5, 0.4), (15, 0.6), (30, 0.75), (50, 0.9)])
def test_confidence_without_combination_bonus(length, expected):
    analyses = _analyze([2] * length)

    # 10 never followed anything, so no bonus applies to it.
    assert analyses[10].combination_count == 0
    assert analyses[10].confidence == pytest.approx(expected)


def test_confidence_bonus_is_capped():
    analyses = _analyze([2] * 60)

    assert analyses[2].confidence == pytest.approx(0.95)
