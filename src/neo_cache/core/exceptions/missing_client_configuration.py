"""Missing client configuration exception.

ONLY client resolution errors - raised when no cache client can be
resolved for a request.

Following maximum separation architecture - one file = one purpose.
"""

from typing import List, Optional

from .base import MissingConfiguration


class MissingClientConfiguration(MissingConfiguration):
    """Raised when the requested cache client is not registered."""

    def __init__(self, client_key: Optional[str], available: Optional[List[str]] = None):
        self.client_key = client_key
        if client_key is None:
            message = "No cache client is configured"
        else:
            message = f"Cache client '{client_key}' is not configured"
        super().__init__(
            message=message,
            error_code="CACHE_CLIENT_NOT_CONFIGURED",
            details={"client_key": client_key, "available": list(available or [])},
        )
