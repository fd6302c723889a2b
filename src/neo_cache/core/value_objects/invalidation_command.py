"""Invalidation command value objects.

ONLY invalidation request/receipt - what the write path asks the
consistency service to do and what it gets back.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple, Dict, Any


@dataclass(frozen=True)
class InvalidationCommand:
    """Request to invalidate a set of cache keys after a write.

    Keys are logical keys as produced by a key builder; the client namespace
    prefix is applied by the client provider.
    """

    domain: str
    tenant_id: str
    keys: Tuple[str, ...]
    reason: str
    delay_ms: Optional[int] = None
    lock_duration_ms: Optional[int] = None
    notify: bool = True
    client_key: Optional[str] = None
    request_id: Optional[str] = None

    def __post_init__(self):
        # Store any sequence as a tuple; bare strings stay as-is for the validator
        if not isinstance(self.keys, (tuple, str, bytes)):
            object.__setattr__(self, "keys", tuple(self.keys or ()))


@dataclass(frozen=True)
class InvalidationReceipt:
    """Acknowledgement that an invalidation ran its first phase."""

    request_id: str
    scheduled_at: datetime
    second_delete_at: datetime
    keys: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert receipt to dictionary for serialization."""
        return {
            "request_id": self.request_id,
            "scheduled_at": self.scheduled_at.isoformat(),
            "second_delete_at": self.second_delete_at.isoformat(),
            "keys": list(self.keys),
        }
