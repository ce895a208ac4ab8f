"""SEO score projection and content-plan recommendations."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

from blogcanvas.config import settings
from blogcanvas.core.exceptions import NegativeCountError, NonFiniteScoreError
from blogcanvas.schemas.projection import ProjectionInput
from blogcanvas.services.scoring_rules import ScoringTier, sum_tiers

logger = logging.getLogger(__name__)

Confidence = Literal["high", "medium", "low"]

MAX_SCORE = 100


@dataclass(frozen=True, slots=True)
class _RiskSubject:
    score_increase: float
    gap_count: int
    uncovered_clusters: int
    current_post_count: int

    @property
    def open_work(self) -> int:
        return self.gap_count + self.uncovered_clusters


CONFIDENCE_RISK_TIERS: tuple[ScoringTier, ...] = (
    ScoringTier("large_jump", lambda r: r.score_increase > 25, 2),
    ScoringTier("moderate_jump", lambda r: 15 < r.score_increase <= 25, 1),
    ScoringTier("many_open_items", lambda r: r.open_work > 15, 2),
    ScoringTier("some_open_items", lambda r: 8 < r.open_work <= 15, 1),
    ScoringTier("thin_archive", lambda r: r.current_post_count < 10, 1),
    ScoringTier("jump_outpaces_archive", lambda r: r.score_increase > r.current_post_count, 1),
)
HIGH_CONFIDENCE_MAX_RISK = 1
MEDIUM_CONFIDENCE_MAX_RISK = 3

# (current score predicate, floor, ceiling, uplift), first match wins
TARGET_TIERS: tuple[tuple[Callable[[float], bool], int, int, int], ...] = (
    (lambda score: score < 40, 60, 70, 30),
    (lambda score: score <= 70, 75, 85, 20),
    (lambda score: True, 85, 95, 8),
)


@dataclass(slots=True)
class ProjectionResult:
    """Projected content investment to move from current to target score."""

    current_score: float
    target_score: float
    score_increase: float
    recommended_posts: int
    timeline_months: int
    confidence: Confidence
    monthly_cadence: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_score": self.current_score,
            "target_score": self.target_score,
            "score_increase": self.score_increase,
            "recommended_posts": self.recommended_posts,
            "timeline_months": self.timeline_months,
            "confidence": self.confidence,
            "monthly_cadence": self.monthly_cadence,
        }


@dataclass(frozen=True, slots=True)
class CadencePlan:
    """Publishing rate needed to hit a timeline."""

    posts_per_week: float
    posts_per_month: float

    def to_dict(self) -> dict[str, float]:
        return {"posts_per_week": self.posts_per_week, "posts_per_month": self.posts_per_month}


@dataclass(frozen=True, slots=True)
class ForecastPoint:
    month: int
    projected_score: int

    def to_dict(self) -> dict[str, int]:
        return {"month": self.month, "projected_score": self.projected_score}


@dataclass(frozen=True, slots=True)
class Milestone:
    month: int
    expected_score: int
    posts_completed: int

    def to_dict(self) -> dict[str, int]:
        return {
            "month": self.month,
            "expected_score": self.expected_score,
            "posts_completed": self.posts_completed,
        }


@dataclass(slots=True)
class ProjectionPlan:
    """Everything the reporting collaborator renders for one client pitch."""

    projection: ProjectionResult
    cadence: CadencePlan
    forecast: list[ForecastPoint]
    milestones: list[Milestone]
    summary: str
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "projection": self.projection.to_dict(),
            "cadence": self.cadence.to_dict(),
            "forecast": [point.to_dict() for point in self.forecast],
            "milestones": [milestone.to_dict() for milestone in self.milestones],
            "summary": self.summary,
            "recommendations": list(self.recommendations),
        }


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def _require_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise NonFiniteScoreError(name, value)


def _require_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise NegativeCountError(name, value)


def calculate_recommended_posts(
    score_increase: float,
    gap_count: int = 0,
    uncovered_clusters: int = 0,
) -> int:
    """Posts needed for a score jump; 0 when no increase is requested."""
    if score_increase <= 0:
        return 0
    raw = (
        score_increase * settings.posts_per_score_point
        + uncovered_clusters * settings.posts_per_uncovered_cluster
        + gap_count * settings.posts_per_gap
    )
    return math.ceil(raw)


def estimate_timeline_months(total_posts: int, posts_per_month: float | None = None) -> int:
    """Whole months needed to publish `total_posts` at a sustainable cadence."""
    cadence = settings.sustainable_posts_per_month if posts_per_month is None else posts_per_month
    if cadence <= 0 or total_posts <= 0:
        return 0
    return math.ceil(total_posts / cadence)


def assess_confidence(
    score_increase: float,
    gap_count: int,
    uncovered_clusters: int,
    current_post_count: int,
) -> Confidence:
    """Rate execution risk of a projection from its risk-point table."""
    if score_increase <= 0:
        return "high"
    risk = sum_tiers(
        CONFIDENCE_RISK_TIERS,
        _RiskSubject(
            score_increase=score_increase,
            gap_count=gap_count,
            uncovered_clusters=uncovered_clusters,
            current_post_count=current_post_count,
        ),
    )
    if risk <= HIGH_CONFIDENCE_MAX_RISK:
        return "high"
    if risk <= MEDIUM_CONFIDENCE_MAX_RISK:
        return "medium"
    return "low"


def project_seo_score(
    current_score: float,
    target_score: float,
    gap_count: int = 0,
    uncovered_clusters: int = 0,
    current_post_count: int = 0,
) -> ProjectionResult:
    """Project posts, months and confidence needed to reach `target_score`.

    `score_increase` is reported as-is, so a target below the current score
    yields a non-positive increase and an empty plan rather than an error.

    Raises:
        NonFiniteScoreError: a score is NaN or infinite.
        NegativeCountError: a count is negative.
    """
    _require_finite("current_score", current_score)
    _require_finite("target_score", target_score)
    _require_non_negative("gap_count", gap_count)
    _require_non_negative("uncovered_clusters", uncovered_clusters)
    _require_non_negative("current_post_count", current_post_count)

    score_increase = target_score - current_score
    recommended_posts = calculate_recommended_posts(score_increase, gap_count, uncovered_clusters)
    timeline_months = estimate_timeline_months(recommended_posts)
    confidence = assess_confidence(
        score_increase,
        gap_count,
        uncovered_clusters,
        current_post_count,
    )

    result = ProjectionResult(
        current_score=current_score,
        target_score=target_score,
        score_increase=score_increase,
        recommended_posts=recommended_posts,
        timeline_months=timeline_months,
        confidence=confidence,
        monthly_cadence=settings.sustainable_posts_per_month if recommended_posts else 0,
    )
    logger.debug("Projected SEO score", extra=result.to_dict())
    return result


def get_recommended_target(current_score: float) -> int:
    """Recommend an achievable target tier; never below the current score."""
    _require_finite("current_score", current_score)
    floor, ceiling, uplift = next(
        (floor, ceiling, uplift)
        for applies, floor, ceiling, uplift in TARGET_TIERS
        if applies(current_score)
    )
    target = max(floor, min(ceiling, _round_half_up(current_score + uplift)))
    return min(MAX_SCORE, max(target, math.ceil(current_score)))


def calculate_cadence(total_posts: float, months: float) -> CadencePlan:
    """Posts per month and per week needed to publish `total_posts` in `months`."""
    if months <= 0 or total_posts <= 0:
        return CadencePlan(posts_per_week=0.0, posts_per_month=0.0)

    posts_per_month = total_posts / months
    posts_per_week = posts_per_month / settings.weeks_per_month
    if posts_per_week >= 1:
        posts_per_week = float(_round_half_up(posts_per_week))
    else:
        posts_per_week = round(posts_per_week, 1)

    return CadencePlan(
        posts_per_week=posts_per_week,
        posts_per_month=round(posts_per_month, 1),
    )


def generate_forecast(current_score: int, target_score: int, months: int) -> list[ForecastPoint]:
    """Month-by-month projected scores on a diminishing-returns curve.

    Scores are whole points like `ForecastPoint.projected_score`; fractional
    inputs are rounded half-up first, so month 0 is the rounded current score
    and the final month the rounded target. The curve stays monotonic.
    """
    _require_finite("current_score", current_score)
    _require_finite("target_score", target_score)
    months = max(0, int(months))
    start = _round_half_up(current_score)
    end = _round_half_up(target_score)
    if months == 0:
        return [ForecastPoint(month=0, projected_score=start)]

    delta = end - start
    points: list[ForecastPoint] = []
    for month in range(months + 1):
        if month == 0:
            score = start
        elif month == months:
            score = end
        else:
            progress = month / months
            score = _round_half_up(start + delta * (1 - (1 - progress) ** 2))
        points.append(ForecastPoint(month=month, projected_score=score))
    return points


def generate_milestones(
    projection: ProjectionResult,
    posts_per_month: int | None = None,
) -> list[Milestone]:
    """Monthly milestones assuming each published post lifts the score equally."""
    cadence = posts_per_month or projection.monthly_cadence or settings.sustainable_posts_per_month
    if projection.recommended_posts <= 0 or projection.timeline_months <= 0:
        return []

    score_per_post = projection.score_increase / projection.recommended_posts
    milestones: list[Milestone] = []
    for month in range(1, projection.timeline_months + 1):
        posts_completed = min(month * cadence, projection.recommended_posts)
        expected = _round_half_up(projection.current_score + posts_completed * score_per_post)
        milestones.append(
            Milestone(
                month=month,
                expected_score=min(expected, _round_half_up(projection.target_score)),
                posts_completed=posts_completed,
            )
        )
    return milestones


def _plan_recommendations(projection: ProjectionResult, cadence: CadencePlan) -> list[str]:
    if projection.recommended_posts == 0:
        return [
            "Current score already meets the target; focus on maintaining existing content",
            "Monitor SEO score monthly to catch regressions",
        ]
    return [
        f"Publish {cadence.posts_per_month:g} posts per month (about {cadence.posts_per_week:g} per week)",
        "Focus on high-priority content gaps first",
        "Cover uncovered topic clusters with pillar and supporting posts",
        "Monitor SEO score monthly to track progress",
        "Review and update existing content for quick wins",
    ]


def build_projection_plan(
    current_score: float,
    target_score: float | None = None,
    gap_count: int = 0,
    uncovered_clusters: int = 0,
    current_post_count: int = 0,
    *,
    custom_months: int | None = None,
    website_name: str = "Website",
) -> ProjectionPlan:
    """Bundle projection, cadence, forecast and milestones into one client plan.

    Uses the recommended target when none is given; `custom_months` overrides
    the projected timeline and the cadence is recomputed for it.
    """
    target = get_recommended_target(current_score) if target_score is None else target_score
    projection = project_seo_score(
        current_score,
        target,
        gap_count,
        uncovered_clusters,
        current_post_count,
    )
    if custom_months is not None and custom_months > 0:
        projection.timeline_months = int(custom_months)
        if projection.recommended_posts:
            projection.monthly_cadence = math.ceil(
                projection.recommended_posts / projection.timeline_months
            )

    cadence = calculate_cadence(projection.recommended_posts, projection.timeline_months)
    forecast = generate_forecast(current_score, target, projection.timeline_months)
    milestones = generate_milestones(projection)
    summary = (
        f"Moving {website_name} from SEO score {_round_half_up(current_score)} to "
        f"{_round_half_up(target)} requires approximately {projection.recommended_posts} "
        f"blog posts over {projection.timeline_months} months."
    )

    logger.info(
        "Built projection plan",
        extra={
            "website": website_name,
            "current_score": current_score,
            "target_score": target,
            "recommended_posts": projection.recommended_posts,
            "timeline_months": projection.timeline_months,
            "monthly_cadence": projection.monthly_cadence,
            "confidence": projection.confidence,
        },
    )

    return ProjectionPlan(
        projection=projection,
        cadence=cadence,
        forecast=forecast,
        milestones=milestones,
        summary=summary,
        recommendations=_plan_recommendations(projection, cadence),
    )


def build_projection_plan_from_input(
    payload: ProjectionInput | dict[str, Any],
    *,
    website_name: str = "Website",
) -> ProjectionPlan:
    """Build a plan from a validated `ProjectionInput` payload."""
    data = payload if isinstance(payload, ProjectionInput) else ProjectionInput.model_validate(payload)
    return build_projection_plan(
        data.current_score,
        data.target_score,
        data.gap_count,
        data.uncovered_clusters,
        data.current_post_count,
        custom_months=data.custom_months,
        website_name=website_name,
    )
