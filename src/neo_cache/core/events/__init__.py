"""Cache notification events."""

from .cache_invalidated import CacheInvalidated
from .lock_contention import LockContention
from .prefetch_requested import PrefetchRequested

__all__ = ["CacheInvalidated", "LockContention", "PrefetchRequested"]
