"""Cache engine routers."""

from .cache_consistency_router import cache_consistency_router
from .cache_namespace_router import cache_namespace_router
from .tenant_config_router import tenant_config_router

__all__ = ["cache_consistency_router", "cache_namespace_router", "tenant_config_router"]
