"""Custom exception classes for the scoring engine."""

from typing import Any


class BlogCanvasError(Exception):
    """Base exception for all scoring engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Validation Errors
class ValidationError(BlogCanvasError):
    """Data validation failed."""

    pass


class InvalidScoringInputError(ValidationError):
    """Scoring input is malformed (negative count, non-finite score)."""

    def __init__(self, reason: str, *, field: str, value: Any) -> None:
        super().__init__(
            f"invalid input: {reason}",
            details={"field": field, "value": value},
        )
        self.reason = reason
        self.field = field


class NegativeCountError(InvalidScoringInputError):
    """A count that must be non-negative was negative."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__("negative count", field=field, value=value)


class NonFiniteScoreError(InvalidScoringInputError):
    """A score was NaN or infinite."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__("non-finite score", field=field, value=value)
