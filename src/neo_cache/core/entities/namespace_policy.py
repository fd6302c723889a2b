"""Cache namespace policy entity.

ONLY namespace policy - per-domain key layout, TTL and eviction strategy
used by key builders, the read path and the write path.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class EvictionPolicy(Enum):
    """Eviction strategies a namespace can declare."""

    LRU = "lru"                      # Least Recently Used
    LFU = "lfu"                      # Least Frequently Used
    TTL = "ttl"                      # Expiry only
    DOUBLE_DELETE = "double-delete"  # Write path delayed double delete
    REFRESH = "refresh"              # Reload on invalidation


@dataclass(frozen=True)
class NamespacePolicy:
    """Cache namespace policy entity.

    One policy per domain. Policies are immutable; the registry replaces the
    whole set when configuration changes.
    """

    domain: str
    key_prefix: str
    separator: str
    default_ttl_seconds: int
    eviction_policy: EvictionPolicy = EvictionPolicy.DOUBLE_DELETE
    key_suffix: Optional[str] = None
    hit_threshold_alert: Optional[float] = None

    def __post_init__(self):
        """Validate namespace policy."""
        if not self.domain:
            raise ValueError("Namespace domain cannot be empty")

        if not self.key_prefix:
            raise ValueError("key_prefix cannot be empty")

        if not self.separator:
            raise ValueError("separator cannot be empty")

        if self.default_ttl_seconds < 1:
            raise ValueError("default_ttl_seconds must be at least 1")

        if self.hit_threshold_alert is not None and not 0 <= self.hit_threshold_alert <= 1:
            raise ValueError("hit_threshold_alert must be between 0 and 1")

    def uses_double_delete(self) -> bool:
        """Check if writes should use the delayed double delete."""
        return self.eviction_policy == EvictionPolicy.DOUBLE_DELETE

    def to_dict(self) -> Dict[str, Any]:
        """Convert policy to dictionary for serialization."""
        return {
            "domain": self.domain,
            "key_prefix": self.key_prefix,
            "key_suffix": self.key_suffix,
            "separator": self.separator,
            "default_ttl_seconds": self.default_ttl_seconds,
            "eviction_policy": self.eviction_policy.value,
            "hit_threshold_alert": self.hit_threshold_alert,
        }
