"""Tests for SEO score projection, cadence and forecast helpers."""

import math

import pytest

from blogcanvas.core.exceptions import (
    InvalidScoringInputError,
    NegativeCountError,
    NonFiniteScoreError,
)
from blogcanvas.services.score_projection import (
    assess_confidence,
    build_projection_plan,
    build_projection_plan_from_input,
    calculate_cadence,
    calculate_recommended_posts,
    estimate_timeline_months,
    generate_forecast,
    generate_milestones,
    get_recommended_target,
    project_seo_score,
)


def test_projection_passes_score_increase_through() -> None:
    result = project_seo_score(42, 55, 5, 3, 10)

    assert result.current_score == 42
    assert result.target_score == 55
    assert result.score_increase == 13
    assert result.recommended_posts > 0
    assert result.timeline_months > 0
    assert result.confidence in {"high", "medium", "low"}


def test_large_jump_needs_many_posts_long_timeline_and_low_confidence() -> None:
    result = project_seo_score(30, 80, 15, 10, 5)

    assert result.score_increase == 50
    assert result.recommended_posts > 30
    assert result.timeline_months > 6
    assert result.confidence == "low"


def test_modest_improvement_has_high_confidence_and_short_timeline() -> None:
    result = project_seo_score(65, 75, 3, 2, 20)

    assert result.confidence == "high"
    assert result.timeline_months < 6


def test_already_at_target_needs_no_posts() -> None:
    result = project_seo_score(80, 80, 0, 0, 50)

    assert result.score_increase == 0
    assert result.recommended_posts == 0
    assert result.confidence == "high"


def test_target_below_current_does_not_raise() -> None:
    result = project_seo_score(80, 70, 5, 3, 20)

    assert result.score_increase == -10
    assert result.recommended_posts == 0
    assert result.timeline_months == 0


def test_zero_existing_posts_is_allowed() -> None:
    result = project_seo_score(50, 60, 2, 1, 0)

    assert result.recommended_posts > 0


def test_recommended_posts_is_monotonic_in_each_input() -> None:
    by_increase = [calculate_recommended_posts(increase, 5, 3) for increase in range(0, 60, 5)]
    by_gaps = [calculate_recommended_posts(10, gaps, 3) for gaps in range(0, 20)]
    by_clusters = [calculate_recommended_posts(10, 5, clusters) for clusters in range(0, 12)]

    assert by_increase == sorted(by_increase)
    assert by_gaps == sorted(by_gaps)
    assert by_clusters == sorted(by_clusters)


def test_larger_jumps_need_more_posts_and_months() -> None:
    small = project_seo_score(60, 70, 5, 3, 10)
    large = project_seo_score(40, 85, 15, 12, 5)

    assert large.recommended_posts > small.recommended_posts
    assert large.timeline_months > small.timeline_months


def test_timeline_scales_with_post_count_and_cadence() -> None:
    assert estimate_timeline_months(24, 8) == 3
    assert estimate_timeline_months(48, 4) > estimate_timeline_months(12, 4)
    assert estimate_timeline_months(24, 4) > estimate_timeline_months(24, 8)
    assert estimate_timeline_months(0) == 0


def test_confidence_medium_between_extremes() -> None:
    assert assess_confidence(16, 8, 5, 10) == "medium"
    assert assess_confidence(60, 20, 15, 3) == "low"
    assert assess_confidence(10, 3, 2, 20) == "high"


def test_invalid_counts_and_scores_raise_taxonomy_errors() -> None:
    with pytest.raises(NegativeCountError) as exc_info:
        project_seo_score(40, 60, -1, 0, 0)
    assert exc_info.value.message == "invalid input: negative count"
    assert exc_info.value.details == {"field": "gap_count", "value": -1}

    with pytest.raises(NonFiniteScoreError):
        project_seo_score(math.nan, 60)

    with pytest.raises(InvalidScoringInputError):
        project_seo_score(40, math.inf)


@pytest.mark.parametrize(
    ("current", "low", "high"),
    [
        (25, 60, 70),
        (0, 60, 70),
        (39, 60, 70),
        (40, 75, 85),
        (55, 75, 85),
        (62, 75, 85),
        (70, 75, 85),
        (80, 85, 95),
        (85, 85, 95),
    ],
)
def test_recommended_target_tiers(current: int, low: int, high: int) -> None:
    target = get_recommended_target(current)

    assert low <= target <= high
    assert target >= current


def test_recommended_target_never_below_current() -> None:
    assert get_recommended_target(98) == 98
    assert get_recommended_target(100) == 100


def test_cadence_calibration() -> None:
    normal = calculate_cadence(24, 3)
    aggressive = calculate_cadence(100, 2)
    slow = calculate_cadence(6, 12)

    assert normal.posts_per_week == 2
    assert normal.posts_per_month == 8
    assert aggressive.posts_per_week > 10
    assert slow.posts_per_month <= 1


def test_cadence_with_no_months_is_zero() -> None:
    cadence = calculate_cadence(10, 0)

    assert cadence.posts_per_week == 0
    assert cadence.posts_per_month == 0


def test_forecast_hits_endpoints_and_is_monotonic() -> None:
    forecast = generate_forecast(42, 55, 4)
    scores = [point.projected_score for point in forecast]

    assert [point.month for point in forecast] == [0, 1, 2, 3, 4]
    assert scores[0] == 42
    assert scores[-1] == 55
    assert scores == sorted(scores)


def test_forecast_front_loads_gains() -> None:
    scores = [point.projected_score for point in generate_forecast(30, 80, 10)]
    gains = [later - earlier for earlier, later in zip(scores, scores[1:])]

    assert gains[0] >= gains[-1]


def test_forecast_with_zero_months_is_current_score_only() -> None:
    forecast = generate_forecast(60, 75, 0)

    assert len(forecast) == 1
    assert forecast[0].projected_score == 60


def test_milestones_end_at_target() -> None:
    projection = project_seo_score(42, 55, 5, 3, 10)

    milestones = generate_milestones(projection)

    assert len(milestones) == projection.timeline_months
    assert milestones[-1].posts_completed == projection.recommended_posts
    assert milestones[-1].expected_score == 55
    assert [m.expected_score for m in milestones] == sorted(m.expected_score for m in milestones)


def test_milestones_empty_when_no_posts_needed() -> None:
    assert generate_milestones(project_seo_score(80, 80)) == []


def test_projection_plan_uses_recommended_target_when_missing() -> None:
    plan = build_projection_plan(42, gap_count=5, uncovered_clusters=3, current_post_count=10)

    assert plan.projection.target_score == get_recommended_target(42)
    assert plan.forecast[0].projected_score == 42
    assert plan.forecast[-1].projected_score == plan.projection.target_score
    assert "requires approximately" in plan.summary


def test_projection_plan_custom_months_recomputes_cadence() -> None:
    plan = build_projection_plan(30, 80, 15, 10, 5, custom_months=12)

    assert plan.projection.timeline_months == 12
    assert len(plan.forecast) == 13
    assert plan.cadence.posts_per_month == round(plan.projection.recommended_posts / 12, 1)
    assert plan.to_dict()["projection"]["confidence"] == "low"


def test_projection_plan_from_input_payload() -> None:
    plan = build_projection_plan_from_input(
        {
            "current_score": 65,
            "target_score": 75,
            "gap_count": 3,
            "uncovered_clusters": 2,
            "current_post_count": 20,
        },
        website_name="Acme Blog",
    )

    assert plan.projection.confidence == "high"
    assert plan.summary.startswith("Moving Acme Blog from SEO score 65 to 75")


def test_projection_is_idempotent() -> None:
    assert project_seo_score(30, 80, 15, 10, 5) == project_seo_score(30, 80, 15, 10, 5)


def test_forecast_rounds_fractional_scores_to_whole_points() -> None:
    forecast = generate_forecast(42.4, 55.6, 3)

    assert forecast[0].projected_score == 42
    assert forecast[-1].projected_score == 56
    assert all(isinstance(point.projected_score, int) for point in forecast)


def test_custom_months_keeps_projection_cadence_in_step_with_plan() -> None:
    plan = build_projection_plan(30, 80, 15, 10, 5, custom_months=12)

    assert plan.projection.recommended_posts == 113
    assert plan.projection.monthly_cadence == 10
    assert plan.projection.monthly_cadence == math.ceil(plan.cadence.posts_per_month)
    assert plan.milestones[0].posts_completed == 10
    assert plan.milestones[-1].posts_completed == 113
