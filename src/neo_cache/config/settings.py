"""
Cache engine settings.

Pydantic settings for Redis clients, the distributed lock, namespace policies
and the notification channel. Values come from the environment (prefix
``NEO_CACHE_``, nested delimiter ``__``) or an optional ``.env`` file.
"""
import re
from functools import lru_cache
from typing import Optional, List

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_CACHE_KEY_SEPARATOR,
    DEFAULT_DOUBLE_DELETE_DELAY_MS,
    DEFAULT_REDIS_LOCK_TTL_MS,
    TENANT_CONFIG_CACHE_DOMAIN,
    TENANT_CONFIG_CACHE_TTL_SECONDS,
)
from ..core.entities.namespace_policy import EvictionPolicy


DOMAIN_PATTERN = re.compile(r"^[a-z]+[a-z0-9-]*$")
KEY_PREFIX_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


class RedisClientSettings(BaseModel):
    """Single Redis client; overrides connection defaults."""

    client_key: Optional[str] = Field(default=None, description="Logical client name, falls back to namespace")
    namespace: Optional[str] = Field(default=None, description="Key namespace for this client")
    url: Optional[str] = Field(default=None, description="Connection URL, wins over host/port")
    host: str = Field(default="localhost")
    port: int = Field(default=6379, ge=0, le=65_535)
    db: int = Field(default=0, ge=0, le=15)
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    connection_name: Optional[str] = Field(default=None, min_length=3)
    command_timeout_ms: int = Field(default=5_000, ge=0)
    connect_timeout_ms: int = Field(default=10_000, ge=0)
    keep_alive: bool = False

    @property
    def resolved_key(self) -> str:
        """Key the client is registered under."""
        return self.client_key or self.namespace or "default"


class RedisLockSettings(BaseModel):
    """Quorum lock tuning knobs."""

    drift_factor: float = Field(default=0.01, ge=0)
    retry_count: int = Field(default=10, ge=0)
    retry_delay_ms: int = Field(default=200, ge=0)
    retry_jitter_ms: int = Field(default=200, ge=0)
    automatic_extension_threshold_ms: int = Field(default=500, ge=0)
    default_lock_duration_ms: int = Field(default=DEFAULT_REDIS_LOCK_TTL_MS, gt=0)


class NotificationSettings(BaseModel):
    """Notification channel settings."""

    stream_prefix: str = Field(default="neo-cache", min_length=1)
    stream_max_length: int = Field(default=10_000, gt=0)
    publish_attempts: int = Field(default=3, ge=1)
    publish_retry_delay_ms: int = Field(default=50, ge=0)


class NamespacePolicyConfig(BaseModel):
    """Namespace policy as configured; normalized by the registry."""

    domain: str
    key_prefix: str
    key_suffix: Optional[str] = None
    separator: str = DEFAULT_CACHE_KEY_SEPARATOR
    default_ttl_seconds: int = Field(ge=1)
    eviction_policy: EvictionPolicy = EvictionPolicy.DOUBLE_DELETE
    hit_threshold_alert: Optional[float] = Field(default=None, ge=0, le=1)

    @field_validator("domain")
    @classmethod
    def validate_domain(cls, value: str) -> str:
        if not DOMAIN_PATTERN.match(value):
            raise ValueError("domain may only contain lowercase letters, digits and hyphens")
        return value

    @field_validator("key_prefix")
    @classmethod
    def validate_key_prefix(cls, value: str) -> str:
        if not KEY_PREFIX_PATTERN.match(value):
            raise ValueError("key_prefix may only contain letters, digits, hyphens and underscores")
        return value

    @field_validator("separator")
    @classmethod
    def validate_separator(cls, value: str) -> str:
        if not value:
            raise ValueError("separator cannot be empty")
        return value


def default_namespace_policies() -> List[NamespacePolicyConfig]:
    """Policies active when none are configured."""
    return [
        NamespacePolicyConfig(
            domain=TENANT_CONFIG_CACHE_DOMAIN,
            key_prefix=TENANT_CONFIG_CACHE_DOMAIN,
            default_ttl_seconds=TENANT_CONFIG_CACHE_TTL_SECONDS,
        )
    ]


class CacheSettings(BaseSettings):
    """
    Cache engine configuration.

    Aggregates Redis clients, lock settings and namespace policies. Namespace
    policies may also live in ``policy_file`` (YAML or JSON) for hot reload.
    """

    model_config = SettingsConfigDict(
        env_prefix="NEO_CACHE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="neo-cache")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    default_client_key: Optional[str] = None
    clients: List[RedisClientSettings] = Field(default_factory=list)
    lock: RedisLockSettings = Field(default_factory=RedisLockSettings)
    notification: NotificationSettings = Field(default_factory=NotificationSettings)

    namespace_policies: List[NamespacePolicyConfig] = Field(default_factory=default_namespace_policies)
    policy_file: Optional[str] = None
    policy_reload_interval_seconds: float = Field(default=0, ge=0)

    double_delete_delay_ms: int = Field(default=DEFAULT_DOUBLE_DELETE_DELAY_MS, ge=0)
    default_lock_ttl_ms: int = Field(default=DEFAULT_REDIS_LOCK_TTL_MS, gt=0)

    @property
    def has_clients(self) -> bool:
        """Check if any Redis client is configured."""
        return len(self.clients) > 0


@lru_cache()
def get_settings() -> CacheSettings:
    """Get cached cache settings instance."""
    return CacheSettings()
