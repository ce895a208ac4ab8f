"""Quality scoring for generated article drafts.

The analyzer grades a draft along three weighted axes (SEO, structure and
content depth) and reports a readability score alongside for editors. The
overall score feeds the quality gate that decides whether a draft moves on
to client review or is regenerated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from blogcanvas.config import settings
from blogcanvas.schemas.content import ContentDraft, PostContext
from blogcanvas.services.content_features import ContentFeatures, extract_content_features
from blogcanvas.services.scoring_rules import (
    PenaltyRule,
    RuleOutcome,
    ScoringTier,
    apply_penalties,
    sum_tiers,
)

logger = logging.getLogger(__name__)

SCORE_CEILING = 100


def _keyword_configured(features: ContentFeatures) -> bool:
    return features.keyword is not None


SEO_PENALTY_RULES: tuple[PenaltyRule, ...] = (
    PenaltyRule(
        name="missing_h1",
        violated=lambda f: not f.has_h1,
        penalty=25,
        issue="Missing H1 heading",
        recommendation="Add a clear H1 heading at the top of your content",
    ),
    PenaltyRule(
        name="missing_meta_description",
        violated=lambda f: not f.has_meta_description,
        penalty=15,
        issue="Missing meta description",
        recommendation="Add a meta description comment (<!-- Meta: ... -->) of 120-160 characters",
    ),
    PenaltyRule(
        name="weak_meta_description",
        violated=lambda f: (
            f.has_meta_description
            and len(f.meta_description) < settings.meta_description_min_chars
        ),
        penalty=5,
        issue="Meta description too short",
        recommendation="Expand the meta description to summarize the article in 120-160 characters",
    ),
    PenaltyRule(
        name="keyword_not_found",
        violated=lambda f: _keyword_configured(f) and f.keyword_occurrences == 0,
        penalty=35,
        issue="Target keyword not found in content",
        recommendation=lambda f: f'Include the keyword "{f.keyword}" naturally throughout the content',
    ),
    PenaltyRule(
        name="keyword_stuffing",
        violated=lambda f: (
            _keyword_configured(f)
            and f.keyword_density > settings.keyword_stuffing_density
        ),
        penalty=25,
        issue="Keyword stuffing detected - density too high",
        recommendation="Reduce keyword frequency for more natural content",
    ),
    PenaltyRule(
        name="keyword_underused",
        violated=lambda f: (
            _keyword_configured(f)
            and 0 < f.keyword_density < settings.keyword_underuse_density
        ),
        penalty=10,
        issue=lambda f: f"Keyword usage too low ({f.keyword_occurrences} mentions in {f.word_count} words)",
        recommendation=lambda f: f'Mention "{f.keyword}" a few more times in headings and body copy',
    ),
    PenaltyRule(
        name="keyword_missing_from_intro",
        violated=lambda f: (
            _keyword_configured(f)
            and f.keyword_occurrences > 0
            and not f.keyword_in_intro
        ),
        penalty=5,
        issue="Target keyword missing from introduction",
        recommendation="Use the target keyword within the first paragraph",
    ),
)

STRUCTURE_TIERS: tuple[ScoringTier, ...] = (
    ScoringTier("has_h1", lambda f: f.has_h1, 20),
    ScoringTier("has_h2", lambda f: f.h2_count >= 1, 15),
    ScoringTier("multiple_h2", lambda f: f.h2_count >= 2, 15),
    ScoringTier("has_h3", lambda f: f.h3_count >= 1, 15),
    ScoringTier("has_list", lambda f: f.list_item_count >= 1, 15),
    ScoringTier("rich_lists", lambda f: f.list_item_count >= 3, 10),
    ScoringTier(
        "valid_hierarchy",
        lambda f: f.heading_count > 0 and f.is_hierarchy_valid,
        10,
    ),
)

STRUCTURE_ISSUE_RULES: tuple[PenaltyRule, ...] = (
    PenaltyRule(
        name="no_h2_sections",
        violated=lambda f: f.h2_count == 0,
        penalty=0,
        issue="No H2 section headings",
        recommendation="Break the article into at least two H2 sections",
    ),
    PenaltyRule(
        name="invalid_hierarchy",
        violated=lambda f: not f.is_hierarchy_valid,
        penalty=0,
        issue="H3 subsections used without H2 sections",
        recommendation="Nest H3 subsections under an H2 section",
    ),
    PenaltyRule(
        name="no_lists",
        violated=lambda f: not f.has_lists,
        penalty=0,
        issue="No lists or bullet points",
        recommendation="Use bulleted or numbered lists for steps and key points",
    ),
)

# (minimum words/goal ratio, score), first match wins
DEPTH_TIERS: tuple[tuple[float, int], ...] = (
    (1.0, 100),
    (0.8, 80),
    (0.6, 60),
    (0.4, 40),
)
DEPTH_FLOOR_SCORE = 20


@dataclass(slots=True)
class QualityMetrics:
    """Quality scores and diagnostics for one draft."""

    overall_score: int
    seo_score: int
    structure_score: int
    content_depth_score: int
    readability_score: int
    issues: list[str]
    recommendations: list[str] = field(default_factory=list)
    features: ContentFeatures | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall_score": self.overall_score,
            "seo_score": self.seo_score,
            "structure_score": self.structure_score,
            "content_depth_score": self.content_depth_score,
            "readability_score": self.readability_score,
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
            "features": self.features.to_dict() if self.features else None,
        }


@dataclass(slots=True)
class QualityGateResult:
    """Pass/fail decision for one draft."""

    passed: bool
    overall_score: int
    threshold: int
    failing_reasons: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "overall_score": self.overall_score,
            "threshold": self.threshold,
            "failing_reasons": list(self.failing_reasons),
        }


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def _clamp_score(value: float) -> int:
    return max(0, min(SCORE_CEILING, _round_half_up(value)))


def score_seo(features: ContentFeatures) -> RuleOutcome:
    """Penalty-based SEO score; keyword rules only run when a keyword is set."""
    outcome = apply_penalties(SCORE_CEILING, SEO_PENALTY_RULES, features)
    if features.is_empty:
        outcome.score = 0
    return outcome


def score_structure(features: ContentFeatures) -> RuleOutcome:
    """Additive structure score; every extra structural element can only raise it."""
    diagnostics = apply_penalties(0, STRUCTURE_ISSUE_RULES, features)
    diagnostics.score = _clamp_score(sum_tiers(STRUCTURE_TIERS, features))
    return diagnostics


def score_content_depth(features: ContentFeatures, word_count_goal: int) -> RuleOutcome:
    """Score word count against the post's goal."""
    goal = word_count_goal if word_count_goal > 0 else settings.default_word_count_goal
    ratio = features.word_count / goal

    if features.is_empty:
        score = 0
    else:
        score = next(
            (tier_score for minimum, tier_score in DEPTH_TIERS if ratio >= minimum),
            DEPTH_FLOOR_SCORE,
        )

    issues: list[str] = []
    recommendations: list[str] = []
    if ratio < settings.short_content_ratio:
        issues.append(f"Content too short ({features.word_count} words, goal: {goal})")
        recommendations.append(f"Expand content to at least {goal} words")

    return RuleOutcome(
        score=score,
        triggered=["content_too_short"] if issues else [],
        issues=issues,
        recommendations=recommendations,
    )


def check_readability(features: ContentFeatures) -> int:
    """Sentence- and word-length readability heuristic; 50 when unmeasurable."""
    if features.sentence_count == 0 or features.word_count == 0:
        return 50

    score = 100
    # Ideal sentences run 8-20 words.
    if features.avg_sentence_length > 25:
        score -= 20
    elif features.avg_sentence_length > 20:
        score -= 10
    elif features.avg_sentence_length < 8:
        score -= 5

    if features.avg_word_length > 7:
        score -= 15
    elif features.avg_word_length > 6:
        score -= 10

    return max(0, min(SCORE_CEILING, score))


def calculate_quality_score(
    seo_score: float,
    structure_score: float,
    content_depth_score: float,
) -> int:
    """Weighted overall score from the three sub-scores."""
    weights = settings.quality_weights
    weighted = (
        seo_score * weights["seo_score"]
        + structure_score * weights["structure_score"]
        + content_depth_score * weights["content_depth_score"]
    )
    return _clamp_score(weighted)


def analyze_content(content: str, post: PostContext | dict[str, Any] | None = None) -> QualityMetrics:
    """Analyze a draft and return its quality metrics.

    Issues are ordered SEO first, then structure, then depth. Never raises
    for empty or unstructured text.
    """
    if post is None:
        post = PostContext()
    elif not isinstance(post, PostContext):
        post = PostContext.model_validate(post)

    features = extract_content_features(
        content or "",
        post.target_keyword,
        intro_window_words=settings.keyword_intro_window_words,
    )

    seo = score_seo(features)
    structure = score_structure(features)
    depth = score_content_depth(features, post.word_count_goal)
    readability = check_readability(features)

    overall = calculate_quality_score(seo.score, structure.score, depth.score)

    issues = [*seo.issues, *structure.issues, *depth.issues]
    recommendations = [
        *seo.recommendations,
        *structure.recommendations,
        *depth.recommendations,
    ]

    logger.debug(
        "Analyzed content",
        extra={
            "overall_score": overall,
            "seo_score": seo.score,
            "structure_score": structure.score,
            "content_depth_score": depth.score,
            "word_count": features.word_count,
            "triggered": [*seo.triggered, *structure.triggered, *depth.triggered],
        },
    )

    return QualityMetrics(
        overall_score=overall,
        seo_score=seo.score,
        structure_score=structure.score,
        content_depth_score=depth.score,
        readability_score=readability,
        issues=issues,
        recommendations=recommendations,
        features=features,
    )


def analyze_draft(draft: ContentDraft) -> QualityMetrics:
    """Analyze a `ContentDraft` produced by the content-generation collaborator."""
    return analyze_content(draft.content, draft.post)


def evaluate_quality_gate(
    metrics: QualityMetrics,
    min_overall_score: int | None = None,
) -> QualityGateResult:
    """Decide whether a draft proceeds to review or should be regenerated."""
    threshold = settings.quality_gate_min_score if min_overall_score is None else min_overall_score
    passed = metrics.overall_score >= threshold
    failing_reasons: list[str] = []
    if not passed:
        failing_reasons.append(
            f"Overall score {metrics.overall_score} is below the quality threshold {threshold}"
        )
        failing_reasons.extend(metrics.issues)

    logger.info(
        "Quality gate evaluated",
        extra={
            "passed": passed,
            "overall_score": metrics.overall_score,
            "threshold": threshold,
            "issue_count": len(metrics.issues),
        },
    )

    return QualityGateResult(
        passed=passed,
        overall_score=metrics.overall_score,
        threshold=threshold,
        failing_reasons=failing_reasons,
    )
