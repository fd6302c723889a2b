"""Invalidation response model.

ONLY invalidation acknowledgements.

Following maximum separation architecture - one file = one purpose.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ....core.value_objects.invalidation_command import InvalidationReceipt


class InvalidationAcceptedResponse(BaseModel):
    """Response for an accepted invalidation."""

    request_id: str = Field(..., description="Invalidation request identifier")
    scheduled_at: datetime = Field(..., description="When the second delete was scheduled")
    second_delete_at: datetime = Field(..., description="When the second delete is due")

    @classmethod
    def from_receipt(cls, receipt: InvalidationReceipt) -> "InvalidationAcceptedResponse":
        return cls(
            request_id=receipt.request_id,
            scheduled_at=receipt.scheduled_at,
            second_delete_at=receipt.second_delete_at,
        )
