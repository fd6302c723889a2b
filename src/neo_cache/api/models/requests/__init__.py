"""API request models."""

from .invalidate_cache_request import InvalidateCacheRequest
from .prefetch_request import PrefetchRequest
from .update_tenant_config_request import UpdateTenantConfigRequest

__all__ = ["InvalidateCacheRequest", "PrefetchRequest", "UpdateTenantConfigRequest"]
