"""Top-N recommendations with rule-based reasons."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from spinlens.engine.score import ProbabilityAnalysis
from spinlens.engine.stats import (
    CombinationSource,
    CombinationStats,
    StreakBreakItem,
    StreakBreakStats,
    SymbolStatistics,
    TransitionEntry,
    current_streak,
)

DEFAULT_TOP_N = 2
STREAK_RISK_PERCENTAGE = 25.0
STREAK_CONTEXT_PERCENTAGE = 20.0
STREAK_CONTEXT_MIN_LENGTH = 2
FREQUENCY_REASON_PERCENTAGE = 25.0


@dataclass(frozen=True)
class Recommendation:
    """Recommended next symbol with a one-sentence justification."""

    symbol: int
    probability: float
    confidence: float
    reason: str
    combination_source: CombinationSource | None
    combination_count: int


@dataclass(frozen=True)
class ReasonContext:
    """Everything a reason rule may look at for one candidate."""

    analysis: ProbabilityAnalysis
    stats: SymbolStatistics
    combination_stats: CombinationStats
    last_symbol: int | None
    streak: int
    break_item: StreakBreakItem | None
    prefix: str


@dataclass(frozen=True)
class ReasonRule:
    name: str
    matches: Callable[[ReasonContext], bool]
    render: Callable[[ReasonContext], str]


def _streak_risk(context: ReasonContext) -> bool:
    return (
        context.streak >= 1
        and context.break_item is not None
        and context.break_item.percentage >= STREAK_RISK_PERCENTAGE
    )


def _render_streak_risk(context: ReasonContext) -> str:
    return (
        f"{context.analysis.symbol} has come up {context.streak} times in a row; "
        f"{context.break_item.percentage:.2f}% of its streaks end at this length"
    )


def _has_combination(context: ReasonContext) -> bool:
    return context.analysis.combination_source is not None and context.analysis.combination_count > 0


def _render_combination(context: ReasonContext) -> str:
    after = "->".join(str(symbol) for symbol in context.analysis.combination_prefix)
    return (
        f"{context.prefix}By {context.analysis.combination_source} combination (after {after}): "
        f"comes up in {context.analysis.combination_score:.2f}% of cases "
        f"({context.analysis.combination_count} times)"
    )


def _best_successor(context: ReasonContext) -> TransitionEntry | None:
    if context.last_symbol is None:
        return None
    successors = context.combination_stats.pairs.successors((context.last_symbol,))
    return successors[0] if successors else None


def _is_best_successor(context: ReasonContext) -> bool:
    best = _best_successor(context)
    return best is not None and best.next_symbol == context.analysis.symbol and best.count > 0


def _render_best_successor(context: ReasonContext) -> str:
    best = _best_successor(context)
    return (
        f"{context.prefix}After {context.last_symbol}, {context.analysis.symbol} comes up most often "
        f"({best.percentage:.2f}%, {best.count} times)"
    )


def _render_frequency(context: ReasonContext) -> str:
    return (
        f"{context.prefix}Across the whole history: comes up in {context.stats.percentage:.2f}% "
        f"of spins ({context.stats.count} times)"
    )


def _render_hot(context: ReasonContext) -> str:
    return f"{context.prefix}Hot: frequent in recent spins ({context.analysis.hot_cold_score:.2f}%)"


def _render_cold(context: ReasonContext) -> str:
    return f"{context.prefix}Cold: not seen for a while, may be due"


def _render_balanced(context: ReasonContext) -> str:
    return f"{context.prefix}Balanced choice (frequency {context.analysis.frequency_score:.2f}%)"


# First match wins; the order is part of the behaviour.
REASON_RULES: tuple[ReasonRule, ...] = (
    ReasonRule("streak_risk", _streak_risk, _render_streak_risk),
    ReasonRule("combination", _has_combination, _render_combination),
    ReasonRule("best_successor", _is_best_successor, _render_best_successor),
    ReasonRule(
        "frequency",
        lambda context: context.analysis.frequency_score >= FREQUENCY_REASON_PERCENTAGE,
        _render_frequency,
    ),
    ReasonRule("hot", lambda context: context.stats.is_hot, _render_hot),
    ReasonRule("cold", lambda context: context.stats.is_cold, _render_cold),
    ReasonRule("balanced", lambda context: True, _render_balanced),
)


def streak_context(symbols: Sequence[int], streak_stats: Sequence[StreakBreakStats]) -> str:
    """Sentence about the last symbol's running streak, or "" when it is not risky."""
    if not symbols:
        return ""
    last_symbol = symbols[-1]
    streak = current_streak(symbols, last_symbol)
    if streak < STREAK_CONTEXT_MIN_LENGTH:
        return ""

    stats = next((item for item in streak_stats if item.symbol == last_symbol), None)
    item = stats.break_at(streak) if stats is not None else None
    if item is None or item.percentage < STREAK_CONTEXT_PERCENTAGE:
        return ""
    return f"{last_symbol} has come up {streak} times in a row; streaks like this often break here. "


class RecommendationBuilder:
    """Pick the highest-probability symbols and explain each pick."""

    def __init__(self, top_n: int = DEFAULT_TOP_N, rules: Sequence[ReasonRule] = REASON_RULES) -> None:
        if top_n <= 0:
            raise ValueError("top_n must be > 0.")
        self.top_n = top_n
        self.rules = tuple(rules)

    def build(
        self,
        probabilities: Sequence[ProbabilityAnalysis],
        statistics: Sequence[SymbolStatistics],
        symbols: Sequence[int],
        combination_stats: CombinationStats,
        streak_stats: Sequence[StreakBreakStats] = (),
    ) -> list[Recommendation]:
        """Return up to ``top_n`` recommendations, best first."""
        ranked = sorted(probabilities, key=lambda item: item.probability, reverse=True)
        stats_by_symbol = {item.symbol: item for item in statistics}
        streaks_by_symbol = {item.symbol: item for item in streak_stats}
        last_symbol = symbols[-1] if symbols else None
        shared_prefix = streak_context(symbols, streak_stats)

        recommendations: list[Recommendation] = []
        for analysis in ranked[: self.top_n]:
            streak = current_streak(symbols, analysis.symbol)
            symbol_streaks = streaks_by_symbol.get(analysis.symbol)
            context = ReasonContext(
                analysis=analysis,
                stats=stats_by_symbol[analysis.symbol],
                combination_stats=combination_stats,
                last_symbol=last_symbol,
                streak=streak,
                break_item=symbol_streaks.break_at(streak) if symbol_streaks is not None else None,
                prefix=shared_prefix if analysis.symbol != last_symbol else "",
            )
            recommendations.append(
                Recommendation(
                    symbol=analysis.symbol,
                    probability=analysis.probability,
                    confidence=analysis.confidence,
                    reason=self.explain(context),
                    combination_source=analysis.combination_source,
                    combination_count=analysis.combination_count,
                )
            )
        return recommendations

    def explain(self, context: ReasonContext) -> str:
        for rule in self.rules:
            if rule.matches(context):
                return rule.render(context).strip()
        return ""
