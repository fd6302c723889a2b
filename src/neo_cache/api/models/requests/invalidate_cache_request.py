"""Invalidate cache request model.

ONLY invalidation requests - body of the write-path invalidation endpoint.
Content rules (blank fields, empty key lists) are enforced by the
consistency service so they surface as cache validation errors.

Following maximum separation architecture - one file = one purpose.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ....core.value_objects.invalidation_command import InvalidationCommand


class InvalidateCacheRequest(BaseModel):
    """Request model for a delayed double-delete invalidation."""

    domain: str = Field(..., description="Namespace domain, e.g. tenant-config")
    tenant_id: str = Field(..., description="Tenant whose data changed")
    keys: List[str] = Field(..., description="Logical cache keys to invalidate")
    reason: str = Field(..., description="Why the keys are invalidated")
    client_key: Optional[str] = Field(default=None, description="Cache client to use")
    delay_ms: Optional[int] = Field(default=None, ge=0, description="Delay before the second delete")
    lock_duration_ms: Optional[int] = Field(default=None, ge=1, description="Lock lease duration")
    notify: bool = Field(default=True, description="Publish an invalidation notification")

    def to_command(self, request_id: Optional[str] = None) -> InvalidationCommand:
        """Convert to an invalidation command."""
        return InvalidationCommand(
            domain=self.domain,
            tenant_id=self.tenant_id,
            keys=tuple(self.keys),
            reason=self.reason,
            delay_ms=self.delay_ms,
            lock_duration_ms=self.lock_duration_ms,
            notify=self.notify,
            client_key=self.client_key,
            request_id=request_id,
        )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "domain": "tenant-config",
                "tenant_id": "tenant-001",
                "keys": ["tenant-config:tenant-001:config"],
                "reason": "tenant profile updated",
                "delay_ms": 100,
            }
        }
    )
