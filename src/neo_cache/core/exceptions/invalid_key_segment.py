"""Invalid key segment exception.

ONLY key composition errors - raised when a cache key cannot be built
from the supplied segments.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional

from .base import CacheValidationError


class InvalidKeySegment(CacheValidationError):
    """Cache key segment validation error.

    Raised when:
    - A segment is missing, empty or blank after trimming
    - The separator is empty
    - No segments were supplied at all
    """

    def __init__(
        self,
        reason: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.reason = reason
        super().__init__(
            message=f"Invalid cache key segment: {reason}",
            error_code=error_code or "CACHE_KEY_SEGMENT_INVALID",
            details=details,
        )

    @classmethod
    def empty_segment(cls, position: int) -> "InvalidKeySegment":
        """Create exception for a missing or blank segment."""
        return cls(
            reason="segment cannot be empty",
            error_code="CACHE_KEY_SEGMENT_EMPTY",
            details={"position": position},
        )

    @classmethod
    def empty_separator(cls) -> "InvalidKeySegment":
        """Create exception for an empty separator."""
        return cls(
            reason="separator cannot be empty",
            error_code="CACHE_KEY_SEPARATOR_EMPTY",
        )

    @classmethod
    def no_segments(cls) -> "InvalidKeySegment":
        """Create exception for an empty segment list."""
        return cls(
            reason="at least one segment is required",
            error_code="CACHE_KEY_NO_SEGMENTS",
        )
