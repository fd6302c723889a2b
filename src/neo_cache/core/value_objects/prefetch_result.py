"""Prefetch result value object.

ONLY prefetch outcome - how many keys were queued for refresh and which
ones could not be.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any


@dataclass(frozen=True)
class PrefetchFailure:
    """Key that could not be queued for prefetch."""

    key: str
    reason: str


@dataclass(frozen=True)
class PrefetchResult:
    """Outcome of a prefetch request."""

    refreshed: int
    failures: List[PrefetchFailure] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return len(self.failures) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "refreshed": self.refreshed,
            "failures": [{"key": failure.key, "reason": failure.reason} for failure in self.failures],
        }
