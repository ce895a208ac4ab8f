"""Scoring engine configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scoring constants loaded from environment variables.

    Every weight and threshold used by the scorers lives here so product
    tuning happens in one place. Defaults are the calibrated values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BLOGCANVAS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Content quality: overall_score weights (must sum to 1.0)
    quality_weight_seo: float = 0.45
    quality_weight_structure: float = 0.35
    quality_weight_depth: float = 0.20

    # Content quality: keyword density band (occurrences / words)
    keyword_stuffing_density: float = 0.05
    keyword_underuse_density: float = 0.005
    keyword_intro_window_words: int = 100

    # Content quality: meta description marker
    meta_description_min_chars: int = 70

    # Content quality: depth
    default_word_count_goal: int = 1000
    short_content_ratio: float = 0.5

    # Quality gate
    quality_gate_min_score: int = 70

    # Score projection
    posts_per_score_point: float = 1.5
    posts_per_uncovered_cluster: float = 3.0
    posts_per_gap: float = 0.5
    sustainable_posts_per_month: int = 8
    weeks_per_month: float = 4.33

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        """Accept lowercase level names from the environment."""
        if isinstance(value, str):
            return value.strip().upper() or "INFO"
        return value

    @model_validator(mode="after")
    def _check_quality_weights(self) -> "Settings":
        total = (
            self.quality_weight_seo
            + self.quality_weight_structure
            + self.quality_weight_depth
        )
        if abs(total - 1.0) > 1e-6:
            raise ValueError(
                f"Quality weights must sum to 1.0 (got {total:.3f})",
            )
        if self.sustainable_posts_per_month <= 0:
            raise ValueError("sustainable_posts_per_month must be positive")
        if self.weeks_per_month <= 0:
            raise ValueError("weeks_per_month must be positive")
        return self

    @property
    def quality_weights(self) -> dict[str, float]:
        """Sub-score weights keyed by QualityMetrics field name."""
        return {
            "seo_score": self.quality_weight_seo,
            "structure_score": self.quality_weight_structure,
            "content_depth_score": self.quality_weight_depth,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()

    return settings


settings = get_settings()
