"""Cache engine dependencies.

ONLY dependency providers - hands the wired cache module and its services
to route handlers.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..application.monitoring.cache_metrics_hook import CacheMetricsHook
from ..application.services.cache_consistency_service import CacheConsistencyService
from ..application.services.cache_namespace_service import CacheNamespaceService
from ..application.services.cache_notification_service import CacheNotificationService
from ..application.services.tenant_config_service import TenantConfigService
from ..core.exceptions import MissingConfiguration
from ..module import CacheModule


async def get_cache_module(request: Request) -> CacheModule:
    """Get the cache module attached to the application."""
    module = getattr(request.app.state, "cache_module", None)
    if module is None:
        raise MissingConfiguration("Cache module is not initialized")
    return module


async def get_consistency_service(
    module: Annotated[CacheModule, Depends(get_cache_module)]
) -> CacheConsistencyService:
    return module.consistency_service


async def get_notification_service(
    module: Annotated[CacheModule, Depends(get_cache_module)]
) -> CacheNotificationService:
    return module.notification_service


async def get_namespace_service(
    module: Annotated[CacheModule, Depends(get_cache_module)]
) -> CacheNamespaceService:
    return module.namespace_service


async def get_tenant_config_service(
    module: Annotated[CacheModule, Depends(get_cache_module)]
) -> TenantConfigService:
    return module.tenant_config_service


async def get_metrics_hook(
    module: Annotated[CacheModule, Depends(get_cache_module)]
) -> CacheMetricsHook:
    return module.metrics
