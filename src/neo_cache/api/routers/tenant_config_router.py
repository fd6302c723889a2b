"""Tenant configuration router.

ONLY tenant configuration endpoints - cached reads and updates that
invalidate the cached record.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from ..dependencies import get_tenant_config_service
from ..models.requests.update_tenant_config_request import UpdateTenantConfigRequest
from ..models.responses.invalidation_response import InvalidationAcceptedResponse
from ...application.services.tenant_config_service import TenantConfigService

tenant_config_router = APIRouter(prefix="/internal/cache/tenant-config", tags=["Tenant Configuration"])


@tenant_config_router.get(
    "/{tenant_id}",
    summary="Get tenant configuration",
    description="Read-through lookup backed by the tenant-config namespace",
)
async def get_tenant_configuration(
    tenant_id: str,
    tenant_config_service: Annotated[TenantConfigService, Depends(get_tenant_config_service)],
) -> Dict[str, Any]:
    return await tenant_config_service.get_tenant_configuration(tenant_id)


@tenant_config_router.put(
    "/{tenant_id}",
    summary="Update tenant configuration",
    description="Persist changes, then invalidate the cached record",
)
async def update_tenant_configuration(
    tenant_id: str,
    request: UpdateTenantConfigRequest,
    tenant_config_service: Annotated[TenantConfigService, Depends(get_tenant_config_service)],
) -> Dict[str, Any]:
    record, receipt = await tenant_config_service.update_tenant_configuration(
        tenant_id, request.changes, reason=request.reason
    )
    return {
        "record": record,
        "invalidation": InvalidationAcceptedResponse.from_receipt(receipt).model_dump(mode="json"),
    }
