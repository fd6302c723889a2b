"""Tenant configuration service.

ONLY tenant config caching - read-through access to tenant configuration
records and write-then-invalidate updates.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from ...config.constants import TENANT_CONFIG_CACHE_DOMAIN, TENANT_CONFIG_CACHE_TTL_SECONDS
from ...core.exceptions import InvalidCacheCommand
from ...core.protocols.tenant_configuration_data_source import TenantConfigurationDataSource
from ...core.value_objects.invalidation_command import InvalidationCommand, InvalidationReceipt
from ..keys.tenant_config_key_builder import TenantConfigKeyBuilder
from .cache_consistency_service import CacheConsistencyService
from .cache_read_service import CacheReadService

logger = logging.getLogger(__name__)


class TenantConfigService:
    """Tenant configuration with read-through caching."""

    def __init__(
        self,
        read_service: CacheReadService,
        consistency_service: CacheConsistencyService,
        data_source: TenantConfigurationDataSource,
        key_builder: Optional[TenantConfigKeyBuilder] = None,
    ):
        self.read_service = read_service
        self.consistency_service = consistency_service
        self.data_source = data_source
        self.key_builder = key_builder or TenantConfigKeyBuilder()

    async def get_tenant_configuration(self, tenant_id: str) -> Dict[str, Any]:
        """Return the tenant's configuration, from cache when possible."""
        normalized_tenant_id = self._normalize_tenant_id(tenant_id)
        cache_key = self.key_builder.build(tenant_id=normalized_tenant_id)

        return await self.read_service.get_or_load(
            TENANT_CONFIG_CACHE_DOMAIN,
            cache_key,
            normalized_tenant_id,
            TENANT_CONFIG_CACHE_TTL_SECONDS,
            lambda: self.data_source.fetch_tenant_configuration(normalized_tenant_id),
        )

    async def update_tenant_configuration(
        self,
        tenant_id: str,
        changes: Dict[str, Any],
        reason: str = "tenant configuration updated",
    ) -> Tuple[Dict[str, Any], InvalidationReceipt]:
        """Persist changes, then invalidate the cached record.

        Returns:
            Updated record and the invalidation receipt
        """
        normalized_tenant_id = self._normalize_tenant_id(tenant_id)
        record = await self.data_source.save_tenant_configuration(normalized_tenant_id, changes)

        receipt = await self.consistency_service.invalidate(
            InvalidationCommand(
                domain=TENANT_CONFIG_CACHE_DOMAIN,
                tenant_id=normalized_tenant_id,
                keys=(self.key_builder.build(tenant_id=normalized_tenant_id),),
                reason=reason,
            )
        )
        logger.info(f"Tenant configuration for '{normalized_tenant_id}' updated to version {record.get('version')}")
        return record, receipt

    @staticmethod
    def _normalize_tenant_id(tenant_id: str) -> str:
        normalized = tenant_id.strip() if isinstance(tenant_id, str) else ""
        if not normalized:
            raise InvalidCacheCommand([{"field": "tenant_id", "message": "tenant_id is required"}])
        return normalized
