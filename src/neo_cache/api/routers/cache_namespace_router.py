"""Cache namespace router.

ONLY namespace policy views plus per-domain cache statistics.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Annotated, Any, Dict, List

from fastapi import APIRouter, Depends

from ..dependencies import get_metrics_hook, get_namespace_service
from ..models.responses.namespace_policy_response import NamespacePolicyResponse
from ...application.monitoring.cache_metrics_hook import CacheMetricsHook
from ...application.services.cache_namespace_service import CacheNamespaceService

cache_namespace_router = APIRouter(prefix="/internal/cache", tags=["Cache Namespaces"])


@cache_namespace_router.get(
    "/namespaces",
    response_model=List[NamespacePolicyResponse],
    summary="List namespace policies",
)
async def list_namespaces(
    namespace_service: Annotated[CacheNamespaceService, Depends(get_namespace_service)],
) -> List[NamespacePolicyResponse]:
    return [NamespacePolicyResponse(**policy) for policy in namespace_service.list_policies()]


@cache_namespace_router.get(
    "/metrics",
    summary="Per-domain cache statistics",
    description="Hit rate, origin latency and lock wait averages per namespace domain",
)
async def get_cache_metrics(
    metrics: Annotated[CacheMetricsHook, Depends(get_metrics_hook)],
) -> Dict[str, Any]:
    return {domain: stats.to_dict() for domain, stats in metrics.get_all_stats().items()}
