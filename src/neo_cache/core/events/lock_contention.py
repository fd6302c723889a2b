"""Lock contention event.

ONLY contention notifications - published when a caller gives up waiting
for a cache lock.

Following maximum separation architecture - one file = one purpose.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple, Dict, Any

from ...config.constants import LOCK_CONTENTION_TOPIC


@dataclass(frozen=True)
class LockContention:
    """Lock contention domain event."""

    domain: str
    tenant_id: Optional[str]
    keys: Tuple[str, ...]
    lock_resources: Tuple[str, ...]
    attempts: int = 0
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_event_type(self) -> str:
        """Get event type identifier."""
        return LOCK_CONTENTION_TOPIC

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.get_event_type(),
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "domain": self.domain,
            "tenant_id": self.tenant_id,
            "keys": list(self.keys),
            "lock_resources": list(self.lock_resources),
            "attempts": self.attempts,
        }
