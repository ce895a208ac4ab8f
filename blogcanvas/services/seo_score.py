"""On-page SEO scoring for crawled pages."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from blogcanvas.schemas.page import PageSignals
from blogcanvas.services.scoring_rules import ScoringCategory, ScoringTier, score_categories

logger = logging.getLogger(__name__)

Grade = Literal["A", "B", "C", "D", "F"]

TITLE_MIN_CHARS = 30
TITLE_MAX_CHARS = 60
META_MIN_CHARS = 120
META_MAX_CHARS = 160
H2_MIN = 2
H2_MAX = 8
THIN_CONTENT_WORDS = 300
IMAGE_EXPECTED_WORDS = 500
FEW_INTERNAL_LINKS = 3
EXTERNAL_LINKS_MIN = 2
EXTERNAL_LINKS_MAX = 5

GRADE_THRESHOLDS: tuple[tuple[int, Grade], ...] = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)


def _alt_coverage_points(page: PageSignals) -> int:
    return int(10 * page.images_with_alt / page.images + 0.5)


SEO_CATEGORIES: tuple[ScoringCategory, ...] = (
    ScoringCategory(
        name="title",
        max_points=15,
        tiers=(
            ScoringTier(
                "ideal_length",
                lambda p: TITLE_MIN_CHARS <= len(p.title) <= TITLE_MAX_CHARS,
                15,
            ),
            ScoringTier("present", lambda p: bool(p.title), 8),
        ),
    ),
    ScoringCategory(
        name="meta_description",
        max_points=15,
        tiers=(
            ScoringTier(
                "ideal_length",
                lambda p: META_MIN_CHARS <= len(p.meta_description) <= META_MAX_CHARS,
                15,
            ),
            ScoringTier("present", lambda p: bool(p.meta_description), 7),
        ),
    ),
    ScoringCategory(
        name="headings",
        max_points=15,
        mode="sum",
        tiers=(
            ScoringTier("single_h1", lambda p: p.h1_count == 1, 5),
            ScoringTier("h2_range", lambda p: H2_MIN <= p.h2_count <= H2_MAX, 5),
            ScoringTier("has_h3", lambda p: p.h3_count >= 1, 5),
        ),
    ),
    ScoringCategory(
        name="word_count",
        max_points=20,
        tiers=(
            ScoringTier("1500_plus", lambda p: p.word_count >= 1500, 20),
            ScoringTier("1000_plus", lambda p: p.word_count >= 1000, 15),
            ScoringTier("500_plus", lambda p: p.word_count >= 500, 10),
            ScoringTier("300_plus", lambda p: p.word_count >= 300, 5),
        ),
    ),
    ScoringCategory(
        name="images",
        max_points=10,
        tiers=(
            ScoringTier("alt_coverage", lambda p: p.images > 0, _alt_coverage_points),
            # Long content without any image earns nothing.
            ScoringTier("missing_on_long_content", lambda p: p.word_count >= IMAGE_EXPECTED_WORDS, 0),
            ScoringTier("short_content_exempt", lambda p: True, 5),
        ),
    ),
    ScoringCategory(
        name="internal_links",
        max_points=15,
        tiers=(
            ScoringTier("5_plus", lambda p: p.internal_links >= 5, 15),
            ScoringTier("3_plus", lambda p: p.internal_links >= 3, 10),
            ScoringTier("1_plus", lambda p: p.internal_links >= 1, 5),
        ),
    ),
    ScoringCategory(
        name="external_links",
        max_points=10,
        tiers=(
            ScoringTier(
                "ideal_range",
                lambda p: EXTERNAL_LINKS_MIN <= p.external_links <= EXTERNAL_LINKS_MAX,
                10,
            ),
            ScoringTier("present", lambda p: p.external_links >= 1, 5),
        ),
    ),
)


@dataclass(slots=True)
class SEOAnalysis:
    """Score, grade and diagnostics for one page."""

    score: int
    grade: Grade
    issues: list[str]
    recommendations: list[str]
    breakdown: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "grade": self.grade,
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
            "breakdown": dict(self.breakdown),
        }


def coerce_page(page: PageSignals | dict[str, Any]) -> PageSignals:
    """Accept either a validated model or a raw scraper payload."""
    if isinstance(page, PageSignals):
        return page
    return PageSignals.model_validate(page)


def score_breakdown(page: PageSignals | dict[str, Any]) -> dict[str, int]:
    """Points earned per category, keyed by category name."""
    return score_categories(SEO_CATEGORIES, coerce_page(page))


def calculate_seo_score(page: PageSignals | dict[str, Any]) -> int:
    """Calculate the 0-100 on-page SEO score for a single page."""
    breakdown = score_breakdown(page)
    score = max(0, min(100, sum(breakdown.values())))
    logger.debug("Scored page", extra={"score": score, "breakdown": breakdown})
    return score


def get_seo_grade(score: float) -> Grade:
    """Map a score to its letter grade, first threshold met wins."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def _collect_issues(page: PageSignals) -> tuple[list[str], list[str]]:
    issues: list[str] = []
    recommendations: list[str] = []

    title_length = len(page.title)
    if not page.title:
        issues.append("Missing page title")
        recommendations.append(
            f"Add a descriptive title between {TITLE_MIN_CHARS}-{TITLE_MAX_CHARS} characters"
        )
    elif title_length < TITLE_MIN_CHARS:
        issues.append("Title too short")
        recommendations.append(f"Expand title to at least {TITLE_MIN_CHARS} characters")
    elif title_length > TITLE_MAX_CHARS:
        issues.append("Title too long (may be truncated in search results)")
        recommendations.append(f"Shorten title to {TITLE_MAX_CHARS} characters or fewer")

    meta_length = len(page.meta_description)
    if not page.meta_description:
        issues.append("Missing meta description")
        recommendations.append(
            f"Add a meta description between {META_MIN_CHARS}-{META_MAX_CHARS} characters"
        )
    elif meta_length < META_MIN_CHARS:
        issues.append("Meta description too short")
        recommendations.append(f"Expand meta description to at least {META_MIN_CHARS} characters")
    elif meta_length > META_MAX_CHARS:
        issues.append("Meta description too long (may be truncated in search results)")
        recommendations.append(f"Trim meta description to {META_MAX_CHARS} characters or fewer")

    if page.h1_count == 0:
        issues.append("Missing H1 heading")
        recommendations.append("Add a single H1 heading to the page")
    elif page.h1_count > 1:
        issues.append("Multiple H1 headings found")
        recommendations.append("Use only one H1 heading per page")

    if page.word_count < THIN_CONTENT_WORDS:
        issues.append(f"Thin content (fewer than {THIN_CONTENT_WORDS} words)")
        recommendations.append("Add more comprehensive content (aim for 1000+ words)")

    if page.images_missing_alt > 0:
        issues.append(f"{page.images_missing_alt} images missing alt text")
        recommendations.append("Add descriptive alt text to all images")

    if page.internal_links < FEW_INTERNAL_LINKS:
        issues.append("Few internal links")
        recommendations.append("Add more internal links to related content")

    if page.external_links == 0:
        issues.append("No external references")
        recommendations.append("Cite 2-5 authoritative external sources")

    return issues, recommendations


def analyze_seo(page: PageSignals | dict[str, Any]) -> SEOAnalysis:
    """Score a page and list its human-readable issues and recommendations.

    Issues are re-derived from the page signals rather than from the point
    totals, so a category can earn partial credit and still be reported.
    """
    signals = coerce_page(page)
    breakdown = score_breakdown(signals)
    score = max(0, min(100, sum(breakdown.values())))
    issues, recommendations = _collect_issues(signals)

    return SEOAnalysis(
        score=score,
        grade=get_seo_grade(score),
        issues=issues,
        recommendations=recommendations,
        breakdown=breakdown,
    )


def calculate_aggregate_score(scores: Sequence[float]) -> int:
    """Rounded arithmetic mean of page scores; 0 for no pages."""
    if not scores:
        return 0
    mean = sum(scores) / len(scores)
    # Half-up rounding, matching how scores are shown to clients.
    return int(mean + 0.5) if mean >= 0 else -int(-mean + 0.5)


def score_pages(pages: Iterable[PageSignals | dict[str, Any]]) -> list[int]:
    """Score every page in crawl order."""
    return [calculate_seo_score(page) for page in pages]


def calculate_site_baseline(pages: Iterable[PageSignals | dict[str, Any]]) -> int:
    """Baseline score of a crawl snapshot: the aggregate of its page scores."""
    scores = score_pages(pages)
    baseline = calculate_aggregate_score(scores)
    logger.info(
        "Calculated site baseline",
        extra={"pages": len(scores), "baseline_score": baseline},
    )
    return baseline
