"""Error types raised by the scoring pipeline."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Coarse classification of pipeline failures."""

    TEXT_EXTRACTION_EMPTY = "text_extraction_empty"
    RESOLUTION_TIER_MISS = "resolution_tier_miss"
    RESOLUTION_TIER_TIMEOUT = "resolution_tier_timeout"
    EXTERNAL_SOURCE_UNAVAILABLE = "external_source_unavailable"
    INVALID_INPUT = "invalid_input"


class SnackCheckError(Exception):
    """Base error carrying a kind and a retry hint."""

    def __init__(self, kind: ErrorKind, message: str, *, retryable: bool = False):
        super().__init__(message)
        self.kind = kind
        self.retryable = retryable


class InvalidIngredientError(SnackCheckError, ValueError):
    """Raised when an ingredient name is empty after normalization."""

    def __init__(self, message: str = "Ingredient name must not be empty") -> None:
        super().__init__(ErrorKind.INVALID_INPUT, message)


class TierTimeoutError(SnackCheckError):
    """Raised when a resolution tier exceeds its time budget."""

    def __init__(self, action: str, timeout_seconds: float) -> None:
        super().__init__(
            ErrorKind.RESOLUTION_TIER_TIMEOUT,
            f"{action} timed out after {timeout_seconds}s",
            retryable=True,
        )
        self.timeout_seconds = timeout_seconds


class ExternalSourceError(SnackCheckError):
    """Raised when an upstream data source returns unusable data."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.EXTERNAL_SOURCE_UNAVAILABLE, message)
