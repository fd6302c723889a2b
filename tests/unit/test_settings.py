"""Tests for cache settings."""

import pytest
from pydantic import ValidationError

from neo_cache.config.settings import CacheSettings, NamespacePolicyConfig, RedisClientSettings
from neo_cache.core.entities.namespace_policy import EvictionPolicy


class TestCacheSettings:
    """Test settings defaults and environment loading."""

    def test_defaults(self):
        settings = CacheSettings(_env_file=None)

        assert settings.double_delete_delay_ms == 100
        assert settings.default_lock_ttl_ms == 1_000
        assert settings.lock.retry_count == 10
        assert settings.lock.drift_factor == 0.01
        assert not settings.has_clients
        assert [policy.domain for policy in settings.namespace_policies] == ["tenant-config"]

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("NEO_CACHE_DOUBLE_DELETE_DELAY_MS", "250")
        monkeypatch.setenv("NEO_CACHE_LOCK__RETRY_COUNT", "3")
        monkeypatch.setenv("NEO_CACHE_DEFAULT_CLIENT_KEY", "primary")

        settings = CacheSettings(_env_file=None)

        assert settings.double_delete_delay_ms == 250
        assert settings.lock.retry_count == 3
        assert settings.default_client_key == "primary"

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            CacheSettings(_env_file=None, double_delete_delay_ms=-1)


class TestRedisClientSettings:
    """Test client settings."""

    def test_resolved_key(self):
        assert RedisClientSettings(client_key="a", namespace="b").resolved_key == "a"
        assert RedisClientSettings(namespace="b").resolved_key == "b"
        assert RedisClientSettings().resolved_key == "default"

    def test_db_range(self):
        with pytest.raises(ValidationError):
            RedisClientSettings(db=16)


class TestNamespacePolicyConfig:
    """Test policy validation."""

    def test_defaults(self):
        policy = NamespacePolicyConfig(domain="orders", key_prefix="ord", default_ttl_seconds=10)

        assert policy.separator == ":"
        assert policy.eviction_policy == EvictionPolicy.DOUBLE_DELETE

    @pytest.mark.parametrize("overrides", [
        {"domain": "Orders"},
        {"domain": "1orders"},
        {"key_prefix": "ord:x"},
        {"separator": ""},
        {"default_ttl_seconds": 0},
        {"hit_threshold_alert": 1.5},
        {"eviction_policy": "random"},
    ])
    def test_invalid_values(self, overrides):
        values = {"domain": "orders", "key_prefix": "ord", "default_ttl_seconds": 10}
        values.update(overrides)

        with pytest.raises(ValidationError):
            NamespacePolicyConfig(**values)
