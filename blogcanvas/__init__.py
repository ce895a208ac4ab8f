"""BlogCanvas content-quality, SEO scoring and score projection engine."""

from blogcanvas.services.content_quality import (
    QualityGateResult,
    QualityMetrics,
    analyze_content,
    analyze_draft,
    evaluate_quality_gate,
)
from blogcanvas.services.score_projection import (
    CadencePlan,
    ForecastPoint,
    Milestone,
    ProjectionPlan,
    ProjectionResult,
    build_projection_plan,
    calculate_cadence,
    generate_forecast,
    get_recommended_target,
    project_seo_score,
)
from blogcanvas.services.seo_score import (
    SEOAnalysis,
    analyze_seo,
    calculate_aggregate_score,
    calculate_seo_score,
    get_seo_grade,
)

__all__ = [
    "QualityGateResult",
    "QualityMetrics",
    "analyze_content",
    "analyze_draft",
    "evaluate_quality_gate",
    "CadencePlan",
    "ForecastPoint",
    "Milestone",
    "ProjectionPlan",
    "ProjectionResult",
    "build_projection_plan",
    "calculate_cadence",
    "generate_forecast",
    "get_recommended_target",
    "project_seo_score",
    "SEOAnalysis",
    "analyze_seo",
    "calculate_aggregate_score",
    "calculate_seo_score",
    "get_seo_grade",
]
