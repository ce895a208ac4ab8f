"""Input schemas supplied by the surrounding application."""

from blogcanvas.schemas.content import ContentDraft, PostContext
from blogcanvas.schemas.page import HeadingOutline, PageSignals
from blogcanvas.schemas.projection import ProjectionInput

__all__ = ["ContentDraft", "PostContext", "HeadingOutline", "PageSignals", "ProjectionInput"]
