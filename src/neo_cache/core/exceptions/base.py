"""Base exceptions for the cache engine.

Every error raised by the engine inherits from NeoCacheError and carries an
error code and structured details, mapped to HTTP status codes at the edge.
"""

from typing import Any, Dict, Optional


class NeoCacheError(Exception):
    """Base exception for all cache engine errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class CacheValidationError(NeoCacheError):
    """Raised when caller input fails validation."""
    pass


class MissingConfiguration(NeoCacheError):
    """Raised when a required piece of configuration is absent."""
    pass


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as resolve_status_code
    return resolve_status_code(exception)


def create_error_response(exception: NeoCacheError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The cache engine exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
