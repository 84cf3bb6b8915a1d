from __future__ import annotations

import pytest

from spinlens.engine.stats.percent import exact_percent, normalize_percentages
from spinlens.engine.stats.streaks import StreakBreakItem


def _items(counts, percentages):
    return [
        StreakBreakItem(streak_length=index + 1, count=count, percentage=percentage)
        for index, (count, percentage) in enumerate(zip(counts, percentages))
    ]


def test_exact_percent_is_unrounded_and_guards_zero_total():
    assert exact_percent(1, 3) == pytest.approx(100 / 3)
    assert exact_percent(3, 0) == 0.0
    assert exact_percent(0, -1) == 0.0


def test_remainder_goes_to_first_largest_count():
    items = _items([1, 3, 3], [30.0, 30.0, 30.0])

    normalized = normalize_percentages(items)

    assert [item.percentage for item in normalized] == [30.0, 40.0, 30.0]
    # Inputs are frozen and left untouched.
    assert items[1].percentage == 30.0


def test_unobserved_group_is_not_given_a_share():
    items = _items([0, 0, 0], [0.0, 0.0, 0.0])

    normalized = normalize_percentages(items)

    assert [item.percentage for item in normalized] == [0.0, 0.0, 0.0]


def test_empty_group_and_exact_sum_are_unchanged():
    assert normalize_percentages([]) == []

    items = _items([1, 1], [50.0, 50.0])
    assert normalize_percentages(items) == items


def test_thirds_sum_to_exactly_one_hundred():
    share = exact_percent(1, 3)
    normalized = normalize_percentages(_items([1, 1, 1], [share, share, share]))

    assert sum(item.percentage for item in normalized) == pytest.approx(100.0, abs=1e-9)
