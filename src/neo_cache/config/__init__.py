"""Configuration for the cache engine."""

from .constants import (
    DEFAULT_CACHE_KEY_SEPARATOR,
    TENANT_CONFIG_CACHE_DOMAIN,
    TENANT_CONFIG_CACHE_TTL_SECONDS,
    DEFAULT_DOUBLE_DELETE_DELAY_MS,
    DEFAULT_REDIS_LOCK_TTL_MS,
    INVALIDATION_LOCK_PREFIX,
    LOAD_LOCK_PREFIX,
    INVALIDATION_TOPIC,
    LOCK_CONTENTION_TOPIC,
    PREFETCH_TOPIC,
)
from .logging_config import LoggingConfig, setup_logging, get_logger
from .settings import (
    CacheSettings,
    RedisClientSettings,
    RedisLockSettings,
    NotificationSettings,
    NamespacePolicyConfig,
    get_settings,
)

__all__ = [
    "DEFAULT_CACHE_KEY_SEPARATOR",
    "TENANT_CONFIG_CACHE_DOMAIN",
    "TENANT_CONFIG_CACHE_TTL_SECONDS",
    "DEFAULT_DOUBLE_DELETE_DELAY_MS",
    "DEFAULT_REDIS_LOCK_TTL_MS",
    "INVALIDATION_LOCK_PREFIX",
    "LOAD_LOCK_PREFIX",
    "INVALIDATION_TOPIC",
    "LOCK_CONTENTION_TOPIC",
    "PREFETCH_TOPIC",
    "LoggingConfig",
    "setup_logging",
    "get_logger",
    "CacheSettings",
    "RedisClientSettings",
    "RedisLockSettings",
    "NotificationSettings",
    "NamespacePolicyConfig",
    "get_settings",
]
