"""Cache operation exception.

ONLY store failures - raised when a cache store, lock backend or
serializer fails unexpectedly.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, Optional

from .base import NeoCacheError


class CacheOperationError(NeoCacheError):
    """Raised when a cache operation fails at the store or codec level."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        self.operation = operation
        self.cause = cause
        payload = {"operation": operation}
        payload.update(details or {})
        if cause is not None:
            payload["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(
            message=message,
            error_code="CACHE_OPERATION_FAILED",
            details=payload,
        )
