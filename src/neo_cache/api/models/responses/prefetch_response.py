"""Prefetch response model.

ONLY prefetch outcomes.

Following maximum separation architecture - one file = one purpose.
"""

from typing import List

from pydantic import BaseModel, Field

from ....core.value_objects.prefetch_result import PrefetchResult


class PrefetchFailureResponse(BaseModel):
    key: str
    reason: str


class PrefetchResponse(BaseModel):
    """Response for a prefetch request."""

    refreshed: int = Field(..., description="Keys queued for refresh")
    failures: List[PrefetchFailureResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: PrefetchResult) -> "PrefetchResponse":
        return cls(
            refreshed=result.refreshed,
            failures=[PrefetchFailureResponse(key=f.key, reason=f.reason) for f in result.failures],
        )
