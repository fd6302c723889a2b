"""Invalid cache command exception.

ONLY command validation errors - raised when an invalidation or prefetch
request fails validation.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, List

from .base import CacheValidationError


class InvalidCacheCommand(CacheValidationError):
    """Raised with every validation issue found on a cache command."""

    def __init__(self, issues: List[Dict[str, Any]]):
        self.issues = list(issues)
        fields = ", ".join(issue["field"] for issue in self.issues) or "command"
        super().__init__(
            message=f"Invalid cache command: {fields}",
            error_code="CACHE_COMMAND_INVALID",
            details={"issues": self.issues},
        )
