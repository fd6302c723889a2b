"""Lock lease value object.

ONLY lease state - the caller's view of a quorum lock: which resources,
the unique value proving ownership and how long it stays valid.

Following maximum separation architecture - one file = one purpose.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class LockState(Enum):
    """Lifecycle states of a lock lease."""

    PENDING = "pending"
    ACQUIRED = "acquired"
    EXTENDED = "extended"
    RELEASED = "released"
    EXPIRED = "expired"
    FAILED = "failed"


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000


@dataclass
class LockLease:
    """Lock lease held by a routine.

    ``expiration`` is a monotonic timestamp in milliseconds that already
    accounts for clock drift. ``aborted`` is set when automatic extension
    fails; the routine should stop touching protected state once it is set.
    """

    resource_keys: Tuple[str, ...]
    value: str
    duration_ms: int
    state: LockState = LockState.PENDING
    expiration: float = 0.0
    attempts: int = 0
    wait_ms: float = 0.0
    extensions: int = 0
    aborted: bool = False
    error: Optional[BaseException] = None

    def remaining_ms(self, now: Optional[float] = None) -> float:
        """Milliseconds of validity left, never negative."""
        current = monotonic_ms() if now is None else now
        return max(0.0, self.expiration - current)

    def is_held(self, now: Optional[float] = None) -> bool:
        """Check if the lease is still valid and not aborted."""
        if self.aborted:
            return False
        if self.state not in (LockState.ACQUIRED, LockState.EXTENDED):
            return False
        return self.remaining_ms(now) > 0

    def mark_aborted(self, error: BaseException) -> None:
        """Record a failed extension."""
        self.aborted = True
        self.error = error
