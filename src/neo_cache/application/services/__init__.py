"""Cache application services."""

from .cache_namespace_registry import CacheNamespaceRegistry
from .cache_namespace_service import CacheNamespaceService
from .cache_notification_service import CacheNotificationService, PublishRetryPolicy
from .distributed_lock_service import DistributedLockService, LockContentionContext
from .cache_read_service import CacheReadService
from .cache_consistency_service import CacheConsistencyService
from .tenant_config_service import TenantConfigService

__all__ = [
    "CacheNamespaceRegistry",
    "CacheNamespaceService",
    "CacheNotificationService",
    "PublishRetryPolicy",
    "DistributedLockService",
    "LockContentionContext",
    "CacheReadService",
    "CacheConsistencyService",
    "TenantConfigService",
]
