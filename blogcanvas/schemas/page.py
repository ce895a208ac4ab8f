"""Crawled page schemas consumed by the SEO page scorer."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class HeadingOutline(BaseModel):
    """Heading texts of one page, in document order per level."""

    model_config = ConfigDict(frozen=True)

    h1: list[str] = Field(default_factory=list)
    h2: list[str] = Field(default_factory=list)
    h3: list[str] = Field(default_factory=list)

    @field_validator("h1", "h2", "h3", mode="before")
    @classmethod
    def _default_missing_levels(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class PageSignals(BaseModel):
    """On-page SEO signals of one crawled page.

    Produced by the page-ingestion collaborator (see
    `blogcanvas.integrations.page_signals`). Missing fields default to
    their zero-credit state instead of failing validation.
    """

    model_config = ConfigDict(frozen=True)

    url: str | None = None
    title: str = ""
    meta_description: str = ""
    headings: HeadingOutline = Field(default_factory=HeadingOutline)
    word_count: int = Field(default=0, ge=0)
    images: int = Field(default=0, ge=0)
    images_with_alt: int = Field(default=0, ge=0)
    internal_links: int = Field(default=0, ge=0)
    external_links: int = Field(default=0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _default_nulls(cls, data: Any) -> Any:
        """Replace explicit nulls with defaults and keep alt count within image count."""
        if not isinstance(data, dict):
            return data

        cleaned = {key: value for key, value in data.items() if value is not None}
        for key in ("title", "meta_description"):
            if key in cleaned and isinstance(cleaned[key], str):
                cleaned[key] = cleaned[key].strip()

        images = cleaned.get("images")
        images_with_alt = cleaned.get("images_with_alt")
        if isinstance(images, int) and isinstance(images_with_alt, int) and images >= 0:
            cleaned["images_with_alt"] = min(images_with_alt, images)
        return cleaned

    @property
    def h1_count(self) -> int:
        return len(self.headings.h1)

    @property
    def h2_count(self) -> int:
        return len(self.headings.h2)

    @property
    def h3_count(self) -> int:
        return len(self.headings.h3)

    @property
    def images_missing_alt(self) -> int:
        return max(0, self.images - self.images_with_alt)
