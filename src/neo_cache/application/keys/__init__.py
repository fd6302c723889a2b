"""Cache key builders."""

from .abstract_key_builder import AbstractCacheKeyBuilder
from .tenant_config_key_builder import TenantConfigKeyBuilder, DEFAULT_CONFIG_KEY
from .namespace_policy_key_builder import NamespacePolicyKeyBuilder

__all__ = [
    "AbstractCacheKeyBuilder",
    "TenantConfigKeyBuilder",
    "DEFAULT_CONFIG_KEY",
    "NamespacePolicyKeyBuilder",
]
