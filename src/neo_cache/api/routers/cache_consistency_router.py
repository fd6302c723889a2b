"""Cache consistency router.

ONLY write-path cache operations - delayed double-delete invalidation and
prefetch requests for internal callers.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from ..dependencies import get_consistency_service, get_notification_service
from ..models.requests.invalidate_cache_request import InvalidateCacheRequest
from ..models.requests.prefetch_request import PrefetchRequest
from ..models.responses.invalidation_response import InvalidationAcceptedResponse
from ..models.responses.prefetch_response import PrefetchResponse
from ...application.services.cache_consistency_service import CacheConsistencyService
from ...application.services.cache_notification_service import CacheNotificationService

logger = logging.getLogger(__name__)

cache_consistency_router = APIRouter(
    prefix="/internal/cache",
    tags=["Cache Consistency"],
    responses={
        400: {"description": "Invalid invalidation command"},
        409: {"description": "Invalidation lock is contended"},
    },
)


@cache_consistency_router.post(
    "/invalidations",
    response_model=InvalidationAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Invalidate cache keys",
    description="Delete keys under a distributed lock and schedule the delayed second delete",
)
async def invalidate_cache(
    request: InvalidateCacheRequest,
    consistency_service: Annotated[CacheConsistencyService, Depends(get_consistency_service)],
) -> InvalidationAcceptedResponse:
    """Accept an invalidation and return once the first delete is done."""
    receipt = await consistency_service.invalidate(request.to_command())
    return InvalidationAcceptedResponse.from_receipt(receipt)


@cache_consistency_router.post(
    "/prefetch",
    response_model=PrefetchResponse,
    status_code=status.HTTP_200_OK,
    summary="Request cache prefetch",
    description="Ask cache warmers to reload the given keys",
)
async def prefetch_cache(
    request: PrefetchRequest,
    notification_service: Annotated[CacheNotificationService, Depends(get_notification_service)],
) -> PrefetchResponse:
    result = await notification_service.publish_prefetch_requested(
        domain=request.domain,
        tenant_id=request.tenant_id,
        keys=request.keys,
        bypass_lock=request.bypass_lock,
    )
    return PrefetchResponse.from_result(result)
