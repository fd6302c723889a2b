"""Neo-Cache - cache consistency engine for the NeoMultiTenant platform.

Read-through caching with single-flight loads, delayed double-delete
invalidation under a quorum lock, namespace policies and cache notifications.
"""

from .__version__ import __version__

from .config import (
    CacheSettings,
    RedisClientSettings,
    RedisLockSettings,
    NotificationSettings,
    NamespacePolicyConfig,
    get_settings,
    setup_logging,
)

from .core.exceptions import (
    NeoCacheError,
    CacheValidationError,
    MissingConfiguration,
    InvalidKeySegment,
    InvalidCacheCommand,
    MissingClientConfiguration,
    NamespacePolicyNotFound,
    LockAcquisitionTimeout,
    CacheOperationError,
    get_http_status_code,
    create_error_response,
)

from .core.entities.namespace_policy import NamespacePolicy, EvictionPolicy
from .core.value_objects.invalidation_command import InvalidationCommand, InvalidationReceipt
from .core.value_objects.lock_lease import LockLease, LockState

from .application.keys import AbstractCacheKeyBuilder, TenantConfigKeyBuilder, NamespacePolicyKeyBuilder
from .application.monitoring.cache_metrics_hook import CacheMetricsHook
from .application.services import (
    CacheNamespaceRegistry,
    CacheNamespaceService,
    CacheNotificationService,
    CacheReadService,
    CacheConsistencyService,
    DistributedLockService,
    TenantConfigService,
)

from .infrastructure.clients.cache_client_provider import CacheClientProvider
from .infrastructure.locks.redlock import Redlock

from .module import CacheModule, create_cache_module

__all__ = [
    "__version__",
    # Configuration
    "CacheSettings",
    "RedisClientSettings",
    "RedisLockSettings",
    "NotificationSettings",
    "NamespacePolicyConfig",
    "get_settings",
    "setup_logging",
    # Exceptions
    "NeoCacheError",
    "CacheValidationError",
    "MissingConfiguration",
    "InvalidKeySegment",
    "InvalidCacheCommand",
    "MissingClientConfiguration",
    "NamespacePolicyNotFound",
    "LockAcquisitionTimeout",
    "CacheOperationError",
    "get_http_status_code",
    "create_error_response",
    # Domain
    "NamespacePolicy",
    "EvictionPolicy",
    "InvalidationCommand",
    "InvalidationReceipt",
    "LockLease",
    "LockState",
    # Keys
    "AbstractCacheKeyBuilder",
    "TenantConfigKeyBuilder",
    "NamespacePolicyKeyBuilder",
    # Services
    "CacheMetricsHook",
    "CacheNamespaceRegistry",
    "CacheNamespaceService",
    "CacheNotificationService",
    "CacheReadService",
    "CacheConsistencyService",
    "DistributedLockService",
    "TenantConfigService",
    "CacheClientProvider",
    "Redlock",
    # Wiring
    "CacheModule",
    "create_cache_module",
]
