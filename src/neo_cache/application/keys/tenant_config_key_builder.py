"""Tenant configuration key builder.

ONLY tenant config keys - ``tenant-config:<tenant>:<config_key>[:<variant>]``.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict, List

from ...config.constants import TENANT_CONFIG_CACHE_DOMAIN
from .abstract_key_builder import AbstractCacheKeyBuilder

DEFAULT_CONFIG_KEY = "config"


class TenantConfigKeyBuilder(AbstractCacheKeyBuilder):
    """Builds cache keys for tenant configuration records.

    Example:
        >>> TenantConfigKeyBuilder().build(tenant_id="tenant-001")
        'tenant-config:tenant-001:config'
    """

    def get_namespace(self, payload: Dict[str, Any]) -> str:
        return TENANT_CONFIG_CACHE_DOMAIN

    def get_key_parts(self, payload: Dict[str, Any]) -> List[Any]:
        config_key = payload.get("config_key")
        parts = [
            payload.get("tenant_id"),
            DEFAULT_CONFIG_KEY if config_key is None else config_key,
        ]
        if payload.get("variant"):
            parts.append(payload["variant"])
        return parts
