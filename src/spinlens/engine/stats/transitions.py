"""N-gram transition tables over the symbol alphabet (orders 1-3)."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import product
from typing import Literal

from spinlens.data.models import SYMBOLS

from .percent import exact_percent, normalize_percentages

CombinationSource = Literal["pair", "triple", "quadruple"]

Prefix = tuple[int, ...]

ORDER_SOURCES: dict[int, CombinationSource] = {1: "pair", 2: "triple", 3: "quadruple"}
MAX_ORDER = 3


@dataclass(frozen=True)
class TransitionEntry:
    """How often ``next_symbol`` followed ``prefix``."""

    prefix: Prefix
    next_symbol: int
    count: int
    percentage: float


@dataclass(frozen=True)
class TransitionTable:
    """Dense transition table for one n-gram order.

    Compared by value but not hashable: ``by_prefix`` is a dict.
    """

    __hash__ = None

    order: int
    total: int
    entries: tuple[TransitionEntry, ...]
    by_prefix: dict[Prefix, tuple[TransitionEntry, ...]]

    @property
    def source(self) -> CombinationSource:
        return ORDER_SOURCES[self.order]

    def successors(self, prefix: Sequence[int]) -> tuple[TransitionEntry, ...]:
        """Successors of ``prefix`` sorted by share, empty for foreign prefixes."""
        return self.by_prefix.get(tuple(prefix), ())

    def lookup(self, prefix: Sequence[int], next_symbol: int) -> TransitionEntry | None:
        for entry in self.successors(prefix):
            if entry.next_symbol == next_symbol:
                return entry
        return None


@dataclass(frozen=True)
class CombinationStats:
    """Pair, triple and quadruple transition tables over the whole history."""

    __hash__ = None

    pairs: TransitionTable
    triples: TransitionTable
    quadruples: TransitionTable

    @property
    def total_pairs(self) -> int:
        return self.pairs.total

    @property
    def total_triples(self) -> int:
        return self.triples.total

    @property
    def total_quadruples(self) -> int:
        return self.quadruples.total

    def table(self, order: int) -> TransitionTable:
        tables = {1: self.pairs, 2: self.triples, 3: self.quadruples}
        if order not in tables:
            raise ValueError(f"order must be between 1 and {MAX_ORDER}.")
        return tables[order]


def build_transition_table(symbols: Sequence[int], order: int) -> TransitionTable:
    """Count every (prefix, next) n-gram of length ``order + 1``."""
    if not 1 <= order <= MAX_ORDER:
        raise ValueError(f"order must be between 1 and {MAX_ORDER}.")

    values = list(symbols)
    gram_counts: Counter[tuple[int, ...]] = Counter()
    prefix_totals: Counter[Prefix] = Counter()
    for index in range(order, len(values)):
        prefix = tuple(values[index - order : index])
        gram_counts[prefix + (values[index],)] += 1
        prefix_totals[prefix] += 1

    entries: list[TransitionEntry] = []
    by_prefix: dict[Prefix, tuple[TransitionEntry, ...]] = {}
    for prefix in product(SYMBOLS, repeat=order):
        prefix_total = prefix_totals[prefix]
        group = [
            TransitionEntry(
                prefix=prefix,
                next_symbol=next_symbol,
                count=gram_counts[prefix + (next_symbol,)],
                percentage=exact_percent(gram_counts[prefix + (next_symbol,)], prefix_total),
            )
            for next_symbol in SYMBOLS
        ]
        group = normalize_percentages(group)
        entries.extend(group)
        by_prefix[prefix] = tuple(sorted(group, key=lambda entry: entry.percentage, reverse=True))

    return TransitionTable(
        order=order,
        total=max(0, len(values) - order),
        entries=tuple(entries),
        by_prefix=by_prefix,
    )


def compute_combination_stats(symbols: Sequence[int]) -> CombinationStats:
    """Build the order 1, 2 and 3 tables."""
    return CombinationStats(
        pairs=build_transition_table(symbols, 1),
        triples=build_transition_table(symbols, 2),
        quadruples=build_transition_table(symbols, 3),
    )
