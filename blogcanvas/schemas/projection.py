"""Score projection input schema."""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectionInput(BaseModel):
    """Inputs the reporting collaborator derives from audit history and open gaps."""

    model_config = ConfigDict(frozen=True)

    current_score: float
    target_score: float | None = None
    gap_count: int = Field(default=0, ge=0)
    uncovered_clusters: int = Field(default=0, ge=0)
    current_post_count: int = Field(default=0, ge=0)
    custom_months: int | None = Field(default=None, gt=0)

    @field_validator("current_score", "target_score")
    @classmethod
    def _finite_scores(cls, value: float | None) -> float | None:
        if value is not None and not math.isfinite(value):
            raise ValueError("invalid input: non-finite score")
        return value
