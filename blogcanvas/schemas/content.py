"""Generated-content schemas consumed by the content quality analyzer."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blogcanvas.config import settings


class PostContext(BaseModel):
    """Post metadata a draft is graded against."""

    model_config = ConfigDict(frozen=True)

    target_keyword: str | None = None
    word_count_goal: int = Field(default_factory=lambda: settings.default_word_count_goal)

    @field_validator("target_keyword", mode="before")
    @classmethod
    def _blank_keyword_is_none(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("word_count_goal", mode="before")
    @classmethod
    def _default_non_positive_goal(cls, value: object) -> object:
        """Fall back to the configured goal for missing or non-positive values."""
        if value is None:
            return settings.default_word_count_goal
        if isinstance(value, (int, float)) and value <= 0:
            return settings.default_word_count_goal
        return value


class ContentDraft(BaseModel):
    """One generation attempt: raw article text plus its post context."""

    model_config = ConfigDict(frozen=True)

    content: str = ""
    post: PostContext = Field(default_factory=PostContext)

    @field_validator("content", mode="before")
    @classmethod
    def _none_is_empty(cls, value: object) -> object:
        return "" if value is None else value
