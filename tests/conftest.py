"""Pytest configuration and fixtures for neo-cache tests."""

import pytest

from neo_cache.application.monitoring.cache_metrics_hook import CacheMetricsHook
from neo_cache.application.services.cache_consistency_service import CacheConsistencyService
from neo_cache.application.services.cache_namespace_registry import CacheNamespaceRegistry
from neo_cache.application.services.cache_notification_service import (
    CacheNotificationService,
    PublishRetryPolicy,
)
from neo_cache.application.services.cache_read_service import CacheReadService
from neo_cache.application.services.distributed_lock_service import DistributedLockService
from neo_cache.config.settings import (
    CacheSettings,
    NamespacePolicyConfig,
    NotificationSettings,
    RedisLockSettings,
)
from neo_cache.infrastructure.clients.cache_client_provider import CacheClientProvider
from neo_cache.infrastructure.clients.memory_cache_client import MemoryCacheClient
from neo_cache.infrastructure.locks.memory_lock_node import MemoryLockNode
from neo_cache.infrastructure.locks.redlock import Redlock
from neo_cache.infrastructure.notifications.memory_channel import MemoryNotificationChannel
from neo_cache.module import create_cache_module


@pytest.fixture
def lock_settings():
    """Lock settings with short retries so contention tests finish fast."""
    return RedisLockSettings(
        retry_count=20,
        retry_delay_ms=5,
        retry_jitter_ms=0,
        automatic_extension_threshold_ms=500,
        default_lock_duration_ms=1_000,
    )


@pytest.fixture
def settings(lock_settings):
    """Cache settings isolated from the environment."""
    return CacheSettings(
        _env_file=None,
        lock=lock_settings,
        notification=NotificationSettings(publish_attempts=2, publish_retry_delay_ms=0),
        namespace_policies=[
            NamespacePolicyConfig(domain="tenant-config", key_prefix="tenant-config", default_ttl_seconds=300),
            NamespacePolicyConfig(
                domain="user-profile",
                key_prefix="user",
                key_suffix="v1",
                default_ttl_seconds=60,
                hit_threshold_alert=0.5,
            ),
        ],
        double_delete_delay_ms=20,
    )


@pytest.fixture
def memory_client():
    return MemoryCacheClient()


@pytest.fixture
def lock_node():
    return MemoryLockNode()


@pytest.fixture
def notification_channel():
    return MemoryNotificationChannel()


@pytest.fixture
def registry(settings):
    return CacheNamespaceRegistry(settings)


@pytest.fixture
def client_provider(memory_client):
    return CacheClientProvider({"default": memory_client})


@pytest.fixture
def redlock(lock_node, lock_settings):
    return Redlock([lock_node], lock_settings)


@pytest.fixture
def notification_service(notification_channel):
    return CacheNotificationService(
        notification_channel,
        retry_policy=PublishRetryPolicy(max_attempts=2, initial_delay_ms=0, jitter=False),
    )


@pytest.fixture
def lock_service(redlock, lock_settings, notification_service):
    return DistributedLockService(redlock, lock_settings, notification_service)


@pytest.fixture
def metrics(registry):
    return CacheMetricsHook(registry, min_alert_samples=4)


@pytest.fixture
def read_service(client_provider, lock_service, metrics, registry):
    return CacheReadService(client_provider, lock_service, metrics, registry=registry)


@pytest.fixture
def consistency_service(registry, client_provider, lock_service, notification_service):
    return CacheConsistencyService(
        registry,
        client_provider,
        lock_service,
        notification_service,
        double_delete_delay_ms=20,
    )


@pytest.fixture
def cache_module(settings, memory_client, lock_node, notification_channel):
    """Fully wired cache module on in-memory backends."""
    return create_cache_module(
        settings,
        clients={"default": memory_client},
        lock_nodes=[lock_node],
        notification_channel=notification_channel,
    )
