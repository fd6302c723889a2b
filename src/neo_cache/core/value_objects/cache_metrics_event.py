"""Cache metrics event value object.

ONLY metric samples - hit, miss, origin latency, lock wait and failure
measurements emitted by the read and write paths.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any


class CacheMetric(Enum):
    """Kinds of cache measurements."""

    HIT = "hit"
    MISS = "miss"
    ORIGIN = "origin"    # Origin load latency, ms
    LOCK = "lock"        # Lock wait, ms
    FAILURE = "failure"


@dataclass(frozen=True)
class CacheMetricsEvent:
    """Single cache measurement."""

    domain: str
    metric: CacheMetric
    value: float = 1
    tenant_id: Optional[str] = None
    extra: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "domain": self.domain,
            "tenant_id": self.tenant_id,
            "metric": self.metric.value,
            "value": self.value,
            "extra": self.extra or {},
            "timestamp": self.timestamp.isoformat(),
        }
