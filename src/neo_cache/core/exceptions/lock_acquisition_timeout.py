"""Lock acquisition timeout exception.

ONLY lock contention errors - raised when a quorum lock could not be
acquired within the configured retries.

Following maximum separation architecture - one file = one purpose.
"""

from typing import List, Sequence

from .base import NeoCacheError


class LockAcquisitionTimeout(NeoCacheError):
    """Raised when lock retries are exhausted.

    Attributes:
        resources: Lock resources that could not be acquired
        attempts: Number of acquisition attempts made
        elapsed_ms: Time spent trying to acquire the lock
    """

    def __init__(self, resources: Sequence[str], attempts: int, elapsed_ms: float):
        self.resources: List[str] = list(resources)
        self.attempts = attempts
        self.elapsed_ms = elapsed_ms
        super().__init__(
            message=(
                f"Could not acquire lock on {len(self.resources)} resource(s) "
                f"after {attempts} attempt(s)"
            ),
            error_code="CACHE_LOCK_TIMEOUT",
            details={
                "resources": self.resources,
                "attempts": attempts,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )
