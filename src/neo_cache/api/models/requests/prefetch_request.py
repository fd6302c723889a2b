"""Prefetch request model.

ONLY prefetch requests - asks cache warmers to reload keys.

Following maximum separation architecture - one file = one purpose.
"""

from typing import List

from pydantic import BaseModel, Field


class PrefetchRequest(BaseModel):
    """Request model for cache prefetch."""

    domain: str = Field(..., description="Namespace domain")
    tenant_id: str = Field(..., description="Tenant identifier")
    keys: List[str] = Field(..., description="Logical cache keys to warm")
    bypass_lock: bool = Field(default=False, description="Warm without taking the load lock")
