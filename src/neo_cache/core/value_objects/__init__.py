"""Cache value objects."""

from .invalidation_command import InvalidationCommand, InvalidationReceipt
from .lock_lease import LockLease, LockState, monotonic_ms
from .cache_metrics_event import CacheMetricsEvent, CacheMetric
from .prefetch_result import PrefetchResult, PrefetchFailure

__all__ = [
    "InvalidationCommand",
    "InvalidationReceipt",
    "LockLease",
    "LockState",
    "monotonic_ms",
    "CacheMetricsEvent",
    "CacheMetric",
    "PrefetchResult",
    "PrefetchFailure",
]
