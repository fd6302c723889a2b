"""Cache module wiring.

Builds the cache engine from settings: registry, client provider, lock
nodes, notification channel and services. Without configured Redis clients
everything falls back to in-process implementations.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from .application.monitoring.cache_metrics_hook import CacheMetricsHook
from .application.services.cache_consistency_service import CacheConsistencyService
from .application.services.cache_namespace_registry import CacheNamespaceRegistry
from .application.services.cache_namespace_service import CacheNamespaceService
from .application.services.cache_notification_service import CacheNotificationService, PublishRetryPolicy
from .application.services.cache_read_service import CacheReadService
from .application.services.distributed_lock_service import DistributedLockService
from .application.services.tenant_config_service import TenantConfigService
from .config.settings import CacheSettings, get_settings
from .core.protocols.cache_client import CacheClient
from .core.protocols.lock_node import LockNode
from .core.protocols.notification_channel import NotificationChannel
from .core.protocols.tenant_configuration_data_source import TenantConfigurationDataSource
from .infrastructure.clients.cache_client_provider import CacheClientProvider
from .infrastructure.clients.memory_cache_client import MemoryCacheClient
from .infrastructure.clients.redis_client_factory import create_redis_clients
from .infrastructure.configuration.namespace_policy_loader import NamespacePolicyFileLoader
from .infrastructure.datasources.in_memory_tenant_config import InMemoryTenantConfigurationDataSource
from .infrastructure.locks.memory_lock_node import MemoryLockNode
from .infrastructure.locks.redis_lock_node import RedisLockNode
from .infrastructure.locks.redlock import Redlock
from .infrastructure.notifications.memory_channel import MemoryNotificationChannel
from .infrastructure.notifications.redis_stream_channel import RedisStreamNotificationChannel

logger = logging.getLogger(__name__)


@dataclass
class CacheModule:
    """Wired cache engine components."""

    settings: CacheSettings
    registry: CacheNamespaceRegistry
    client_provider: CacheClientProvider
    redlock: Redlock
    notification_channel: NotificationChannel
    notification_service: CacheNotificationService
    lock_service: DistributedLockService
    metrics: CacheMetricsHook
    read_service: CacheReadService
    consistency_service: CacheConsistencyService
    namespace_service: CacheNamespaceService
    tenant_config_service: TenantConfigService
    policy_loader: Optional[NamespacePolicyFileLoader] = None
    _watch_task: Optional[asyncio.Task] = field(default=None, repr=False)

    async def start(self) -> None:
        """Load the policy file and start watching it when configured."""
        if self.policy_loader is None:
            return
        self.policy_loader.reload_if_changed()
        interval = self.settings.policy_reload_interval_seconds
        if interval > 0 and self._watch_task is None:
            self._watch_task = asyncio.create_task(self.policy_loader.watch(interval))

    async def aclose(self) -> None:
        """Stop the policy watcher, drain second deletes and close clients."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        await self.consistency_service.shutdown()
        await self.client_provider.aclose()
        logger.info("Cache module closed")


def create_cache_module(
    settings: Optional[CacheSettings] = None,
    *,
    clients: Optional[Mapping[str, CacheClient]] = None,
    lock_nodes: Optional[Sequence[LockNode]] = None,
    notification_channel: Optional[NotificationChannel] = None,
    data_source: Optional[TenantConfigurationDataSource] = None,
) -> CacheModule:
    """Create a cache module.

    Args:
        settings: Engine settings, defaults to environment settings
        clients: Pre-built cache clients overriding configured Redis clients
        lock_nodes: Lock nodes overriding the per-client Redis nodes
        notification_channel: Channel overriding the Redis stream channel
        data_source: Origin for tenant configuration records

    Returns:
        Wired cache module
    """
    settings = settings or get_settings()
    registry = CacheNamespaceRegistry(settings)

    redis_clients: Dict[str, CacheClient] = {}
    if clients is None and settings.has_clients:
        redis_clients = dict(create_redis_clients(settings.clients))
    resolved_clients: Dict[str, CacheClient] = dict(clients) if clients is not None else redis_clients

    if not resolved_clients:
        fallback_key = settings.default_client_key or "default"
        logger.warning(
            "No Redis clients configured, using in-memory cache, locks and notifications. "
            "Invalidation is not coordinated across processes in this mode."
        )
        resolved_clients = {fallback_key: MemoryCacheClient()}

    client_provider = CacheClientProvider(
        clients=resolved_clients,
        client_settings=settings.clients,
        default_client_key=settings.default_client_key,
    )

    nodes: List[LockNode] = list(lock_nodes) if lock_nodes else [
        RedisLockNode(client, name=key) for key, client in redis_clients.items()
    ]
    if not nodes:
        nodes = [MemoryLockNode()]
    redlock = Redlock(nodes, settings.lock)

    if notification_channel is None:
        if redis_clients:
            default_client = redis_clients.get(settings.default_client_key or "") or next(iter(redis_clients.values()))
            notification_channel = RedisStreamNotificationChannel(
                default_client,
                stream_prefix=settings.notification.stream_prefix,
                max_len=settings.notification.stream_max_length,
            )
        else:
            notification_channel = MemoryNotificationChannel(
                max_history=settings.notification.stream_max_length,
            )

    notification_service = CacheNotificationService(
        notification_channel,
        retry_policy=PublishRetryPolicy.from_settings(settings.notification),
    )
    lock_service = DistributedLockService(redlock, settings.lock, notification_service)
    metrics = CacheMetricsHook(registry)
    read_service = CacheReadService(
        client_provider,
        lock_service,
        metrics,
        registry=registry,
        lock_duration_ms=settings.lock.default_lock_duration_ms,
    )
    consistency_service = CacheConsistencyService(
        registry,
        client_provider,
        lock_service,
        notification_service,
        double_delete_delay_ms=settings.double_delete_delay_ms,
        lock_duration_ms=settings.default_lock_ttl_ms,
    )

    policy_loader = None
    if settings.policy_file:
        policy_loader = NamespacePolicyFileLoader(settings.policy_file, registry)

    logger.info(
        f"Cache module created: {len(resolved_clients)} client(s), {len(nodes)} lock node(s), "
        f"{len(registry.list())} namespace policies"
    )

    return CacheModule(
        settings=settings,
        registry=registry,
        client_provider=client_provider,
        redlock=redlock,
        notification_channel=notification_channel,
        notification_service=notification_service,
        lock_service=lock_service,
        metrics=metrics,
        read_service=read_service,
        consistency_service=consistency_service,
        namespace_service=CacheNamespaceService(registry),
        tenant_config_service=TenantConfigService(
            read_service,
            consistency_service,
            data_source or InMemoryTenantConfigurationDataSource(),
        ),
        policy_loader=policy_loader,
    )
