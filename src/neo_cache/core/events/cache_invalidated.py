"""Cache invalidated event.

ONLY invalidation notifications - published after the first delete so
peers holding local copies can drop them.

Following maximum separation architecture - one file = one purpose.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple, Dict, Any

from ...config.constants import INVALIDATION_TOPIC


@dataclass(frozen=True)
class CacheInvalidated:
    """Cache invalidated domain event."""

    domain: str
    tenant_id: str
    keys: Tuple[str, ...]
    reason: str
    request_id: Optional[str] = None
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_event_type(self) -> str:
        """Get event type identifier."""
        return INVALIDATION_TOPIC

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.get_event_type(),
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "domain": self.domain,
            "tenant_id": self.tenant_id,
            "keys": list(self.keys),
            "reason": self.reason,
            "request_id": self.request_id,
        }
