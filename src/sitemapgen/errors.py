"""Error types raised during sitemap generation."""

from enum import Enum
from typing import Optional


class ErrorType(str, Enum):
    """Categorizes generation errors for logging and reporting."""

    CONFIGURATION_MISMATCH = "configuration_mismatch"
    RESOLUTION = "resolution"
    SERIALIZATION = "serialization"
    PERSISTENCE = "persistence"
    UNKNOWN = "unknown"


class SitemapError(Exception):
    """Base class for all sitemap generation errors.

    Attributes:
        message: Human-readable error message
        error_type: Categorization for handling
        original_error: The underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.UNKNOWN,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.error_type = error_type
        self.original_error = original_error
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_type={self.error_type})"
        )


class ConfigurationMismatchError(SitemapError):
    """Raised when no site configuration matches a sitemap URL."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            error_type=ErrorType.CONFIGURATION_MISMATCH,
            original_error=original_error,
        )


class ResolutionError(SitemapError):
    """Raised when a content item's URL cannot be resolved to an absolute URL."""

    def __init__(
        self,
        message: str,
        content_id: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.content_id = content_id
        super().__init__(
            message=message,
            error_type=ErrorType.RESOLUTION,
            original_error=original_error,
        )


class SerializationError(SitemapError):
    """Raised when the sitemap document cannot be built or serialized."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            error_type=ErrorType.SERIALIZATION,
            original_error=original_error,
        )


class PersistenceError(SitemapError):
    """Raised when the generated payload cannot be saved."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            error_type=ErrorType.PERSISTENCE,
            original_error=original_error,
        )
