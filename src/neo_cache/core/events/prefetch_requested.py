"""Prefetch requested event.

ONLY prefetch notifications - one message per key asking warmers to
reload it ahead of demand.

Following maximum separation architecture - one file = one purpose.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from ...config.constants import PREFETCH_TOPIC


@dataclass(frozen=True)
class PrefetchRequested:
    """Prefetch requested domain event."""

    domain: str
    tenant_id: str
    key: str
    bypass_lock: bool = False
    request_id: Optional[str] = None
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_event_type(self) -> str:
        """Get event type identifier."""
        return PREFETCH_TOPIC

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.get_event_type(),
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "domain": self.domain,
            "tenant_id": self.tenant_id,
            "key": self.key,
            "bypass_lock": self.bypass_lock,
            "request_id": self.request_id,
        }
