"""Rule tables shared by the deterministic scorers.

Each heuristic is a predicate paired with its points, so a weight can be
tuned without touching the branching of any other rule.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

Predicate = Callable[[Any], bool]
Points = int | Callable[[Any], int]
Message = str | Callable[[Any], str]

CategoryMode = Literal["first_match", "sum"]


def _resolve(value: Any, subject: Any) -> Any:
    return value(subject) if callable(value) else value


@dataclass(frozen=True, slots=True)
class ScoringTier:
    """One `{condition, points}` row of a category table."""

    label: str
    condition: Predicate
    points: Points

    def matches(self, subject: Any) -> bool:
        return bool(self.condition(subject))

    def award(self, subject: Any) -> int:
        return int(_resolve(self.points, subject))


@dataclass(frozen=True, slots=True)
class ScoringCategory:
    """A capped group of tiers.

    `first_match` awards the first matching tier (tiered thresholds);
    `sum` awards every matching tier (independent sub-checks).
    """

    name: str
    max_points: int
    tiers: tuple[ScoringTier, ...]
    mode: CategoryMode = "first_match"

    def score(self, subject: Any) -> int:
        total = 0
        for tier in self.tiers:
            if not tier.matches(subject):
                continue
            total += tier.award(subject)
            if self.mode == "first_match":
                break
        return max(0, min(self.max_points, total))


@dataclass(frozen=True, slots=True)
class PenaltyRule:
    """A rule that subtracts a fixed penalty and reports an issue when violated."""

    name: str
    violated: Predicate
    penalty: int
    issue: Message
    recommendation: Message | None = None


@dataclass(slots=True)
class RuleOutcome:
    """Result of running a rule table against one subject."""

    score: int
    triggered: list[str]
    issues: list[str]
    recommendations: list[str]


def score_categories(categories: Iterable[ScoringCategory], subject: Any) -> dict[str, int]:
    """Score every category, keyed by category name."""
    return {category.name: category.score(subject) for category in categories}


def apply_penalties(
    ceiling: int,
    rules: Sequence[PenaltyRule],
    subject: Any,
) -> RuleOutcome:
    """Subtract the penalty of every violated rule from `ceiling`, clamped to [0, ceiling]."""
    score = ceiling
    triggered: list[str] = []
    issues: list[str] = []
    recommendations: list[str] = []

    for rule in rules:
        if not rule.violated(subject):
            continue
        score -= rule.penalty
        triggered.append(rule.name)
        issues.append(str(_resolve(rule.issue, subject)))
        if rule.recommendation is not None:
            recommendations.append(str(_resolve(rule.recommendation, subject)))

    return RuleOutcome(
        score=max(0, min(ceiling, score)),
        triggered=triggered,
        issues=issues,
        recommendations=recommendations,
    )


def sum_tiers(tiers: Iterable[ScoringTier], subject: Any) -> int:
    """Sum the points of every matching tier (uncapped)."""
    return sum(tier.award(subject) for tier in tiers if tier.matches(subject))
