"""Unit tests for on-page SEO scoring."""

import pytest

from blogcanvas.schemas.page import HeadingOutline, PageSignals
from blogcanvas.services.seo_score import (
    analyze_seo,
    calculate_aggregate_score,
    calculate_seo_score,
    calculate_site_baseline,
    get_seo_grade,
    score_breakdown,
    score_pages,
)


def _ideal_page(**overrides) -> PageSignals:
    payload = {
        "title": "Cold Brew Coffee Guide for Beginners at Home",
        "meta_description": (
            "Learn how to make smooth cold brew coffee at home with the right grind, "
            "ratio and steeping time, plus storage tips and serving ideas."
        ),
        "headings": {
            "h1": ["Cold Brew Coffee Guide"],
            "h2": ["Equipment", "Ratio", "Steeping", "Serving"],
            "h3": ["Grind size", "Filtering"],
        },
        "word_count": 1800,
        "images": 4,
        "images_with_alt": 4,
        "internal_links": 6,
        "external_links": 3,
    }
    payload.update(overrides)
    return PageSignals.model_validate(payload)


def test_ideal_page_scores_at_least_ninety() -> None:
    page = _ideal_page()

    assert calculate_seo_score(page) >= 90
    assert calculate_seo_score(page) == 100


def test_page_with_every_category_at_minimum_scores_zero() -> None:
    page = PageSignals(images=3, images_with_alt=0)

    assert calculate_seo_score(page) == 0


def test_short_page_without_images_is_exempt_from_image_penalty() -> None:
    assert score_breakdown(PageSignals(word_count=200))["images"] == 5
    assert score_breakdown(PageSignals(word_count=800))["images"] == 0


def test_title_and_meta_tiers() -> None:
    short_title = score_breakdown(PageSignals(title="Cold brew"))
    ideal_title = score_breakdown(PageSignals(title="x" * 45))
    assert short_title["title"] == 8
    assert ideal_title["title"] == 15

    short_meta = score_breakdown(PageSignals(meta_description="Quick cold brew tips."))
    ideal_meta = score_breakdown(PageSignals(meta_description="m" * 140))
    assert short_meta["meta_description"] == 7
    assert ideal_meta["meta_description"] == 15


def test_heading_sub_checks_are_independent() -> None:
    only_h3 = PageSignals(headings=HeadingOutline(h3=["Details"]))
    two_h1 = PageSignals(headings=HeadingOutline(h1=["A", "B"], h2=["C", "D"]))

    assert score_breakdown(only_h3)["headings"] == 5
    assert score_breakdown(two_h1)["headings"] == 5


def test_external_links_outside_ideal_range_earn_partial_credit() -> None:
    assert score_breakdown(PageSignals(external_links=1))["external_links"] == 5
    assert score_breakdown(PageSignals(external_links=4))["external_links"] == 10
    assert score_breakdown(PageSignals(external_links=9))["external_links"] == 5


def test_score_is_non_decreasing_in_word_count() -> None:
    scores = [
        calculate_seo_score(PageSignals(word_count=count))
        for count in (0, 299, 300, 499, 500, 999, 1000, 1499, 1500, 5000)
    ]

    assert scores == sorted(scores)


def test_score_is_non_decreasing_in_internal_links_and_alt_ratio() -> None:
    link_scores = [calculate_seo_score(PageSignals(internal_links=n)) for n in range(0, 8)]
    alt_scores = [
        calculate_seo_score(PageSignals(images=8, images_with_alt=n)) for n in range(0, 9)
    ]

    assert link_scores == sorted(link_scores)
    assert alt_scores == sorted(alt_scores)


@pytest.mark.parametrize(
    ("score", "grade"),
    [
        (100, "A"),
        (90, "A"),
        (89, "B"),
        (80, "B"),
        (79, "C"),
        (70, "C"),
        (69, "D"),
        (60, "D"),
        (59, "F"),
        (0, "F"),
    ],
)
def test_grade_thresholds(score: int, grade: str) -> None:
    assert get_seo_grade(score) == grade


def test_analyze_seo_reports_issues_and_recommendations() -> None:
    page = PageSignals(
        title="",
        meta_description="Too short.",
        headings=HeadingOutline(h1=["One", "Two"]),
        word_count=120,
        images=5,
        images_with_alt=2,
        internal_links=1,
    )

    analysis = analyze_seo(page)

    assert analysis.score == calculate_seo_score(page)
    assert analysis.grade == "F"
    assert "Missing page title" in analysis.issues
    assert "Meta description too short" in analysis.issues
    assert "Multiple H1 headings found" in analysis.issues
    assert "Thin content (fewer than 300 words)" in analysis.issues
    assert "3 images missing alt text" in analysis.issues
    assert "Few internal links" in analysis.issues
    assert "Use only one H1 heading per page" in analysis.recommendations


def test_analyze_seo_on_ideal_page_has_no_issues() -> None:
    analysis = analyze_seo(_ideal_page())

    assert analysis.grade == "A"
    assert analysis.issues == []
    assert analysis.to_dict()["breakdown"]["word_count"] == 20


def test_raw_scraper_payload_with_missing_fields_is_defaulted() -> None:
    payload = {
        "title": None,
        "headings": {"h1": ["Only heading"], "h2": None},
        "word_count": 350,
        "images": 2,
        "images_with_alt": 5,
    }

    analysis = analyze_seo(payload)

    assert "Missing page title" in analysis.issues
    assert analysis.breakdown["images"] == 10
    assert analysis.breakdown["headings"] == 5


def test_aggregate_score_is_rounded_mean() -> None:
    assert calculate_aggregate_score([]) == 0
    assert calculate_aggregate_score([80, 90, 85]) == 85
    assert calculate_aggregate_score([70, 81]) == 76


def test_site_baseline_aggregates_page_scores() -> None:
    pages = [_ideal_page(), PageSignals(images=1)]

    assert score_pages(pages) == [100, 0]
    assert calculate_site_baseline(pages) == 50
    assert calculate_site_baseline([]) == 0


def test_scoring_is_idempotent() -> None:
    page = _ideal_page(word_count=640, internal_links=2)

    assert analyze_seo(page) == analyze_seo(page)
