"""Update tenant configuration request model.

ONLY tenant config updates - changed fields plus an optional reason.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field


class UpdateTenantConfigRequest(BaseModel):
    """Request model for tenant configuration updates."""

    changes: Dict[str, Any] = Field(..., description="Fields to change on the record")
    reason: str = Field(default="tenant configuration updated", description="Invalidation reason")
