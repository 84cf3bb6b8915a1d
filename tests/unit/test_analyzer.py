from __future__ import annotations

from collections.abc import Hashable

import pytest

from spinlens.config import DEFAULT_CONFIG, AnalysisConfig
from spinlens.data import Observation
from spinlens.engine.analyzer import analyze_history


def _history(symbols):
    return [
        Observation(id=f"spin-{index}", symbol=symbol, timestamp=1_700_000_000_000 + index)
        for index, symbol in enumerate(symbols)
    ]


def test_empty_history_returns_neutral_profile():
    result = analyze_history([])

    assert result.total_spins == 0
    assert all(item.count == 0 and item.percentage == 0.0 for item in result.symbol_stats)
    for analysis in result.probabilities:
        assert analysis.frequency_score == 25.0
        assert analysis.hot_cold_score == 25.0
        assert analysis.trend_score == 25.0
        assert analysis.confidence == pytest.approx(0.2)
    assert [item.symbol for item in result.recommendations] == [2, 3]
    assert result.recommendations[0].reason.startswith("Across the whole history")


def test_repeating_pattern_end_to_end():
    result = analyze_history(_history([2, 2, 3, 2, 2, 3, 2, 2, 3]))

    after_two = result.combination_stats.pairs.successors((2,))
    assert [(entry.next_symbol, entry.count) for entry in after_two[:2]] == [(2, 3), (3, 3)]
    assert after_two[0].percentage == pytest.approx(50.0)
    assert result.combination_stats.total_pairs == 8

    # The quadruple table is consulted from four spins on, so the deepest
    # matching order (2->2->3) explains the pick rather than the pair after 2.
    first, second = result.recommendations
    assert first.symbol == 2
    assert first.probability == pytest.approx(100.0)
    assert first.combination_source == "quadruple"
    assert first.reason == "By quadruple combination (after 2->2->3): comes up in 100.00% of cases (2 times)"
    assert second.symbol == 3
    assert second.reason == "3 has come up 1 times in a row; 100.00% of its streaks end at this length"


def test_risky_streak_context_prefixes_other_symbols():
    result = analyze_history(_history([3, 2, 2, 3, 2, 2]))

    first, second = result.recommendations
    assert first.symbol == 3
    assert first.reason == (
        "2 has come up 2 times in a row; streaks like this often break here. "
        "By quadruple combination (after 3->2->2): comes up in 100.00% of cases (1 times)"
    )
    assert second.symbol == 2
    assert second.probability == pytest.approx(5.0)
    assert second.reason == "2 has come up 2 times in a row; 100.00% of its streaks end at this length"


def test_streak_profiles_are_exposed():
    result = analyze_history(_history([2, 2, 2, 3]))
    profiles = {item.symbol: item for item in result.streak_break_stats}

    assert profiles[2].break_at(3).count == 1
    assert profiles[3].break_at(1).count == 1


def test_repeated_calls_are_identical():
    history = _history([2, 3, 5, 10, 2, 2, 3, 5, 5, 2, 10, 3, 2, 2, 2])
    config = AnalysisConfig(recent_window_size=10)

    assert analyze_history(history, config) == analyze_history(history, config)


def test_recommendations_follow_probability_order():
    result = analyze_history(_history([5, 10, 2, 3, 5, 5, 10, 2, 3, 3, 2, 5, 10, 10, 2]))

    probabilities = {item.symbol: item.probability for item in result.probabilities}
    top = [item.symbol for item in result.recommendations]
    assert len(top) == 2
    assert probabilities[top[0]] >= probabilities[top[1]]
    assert all(probabilities[top[1]] >= value for symbol, value in probabilities.items() if symbol not in top)


def test_default_config_is_shared_and_unchanged():
    analyze_history(_history([2, 3]))

    assert DEFAULT_CONFIG == AnalysisConfig()


def test_result_collections_are_immutable_and_not_hashable():
    result = analyze_history(_history([2, 3, 5, 2]))

    assert isinstance(result.symbol_stats, tuple)
    assert isinstance(result.probabilities, tuple)
    assert isinstance(result.recommendations, tuple)
    assert isinstance(result.streak_break_stats, tuple)
    assert not isinstance(result, Hashable)
    assert not isinstance(result.combination_stats, Hashable)
    assert not isinstance(result.combination_stats.pairs, Hashable)
    with pytest.raises(TypeError):
        hash(result)
