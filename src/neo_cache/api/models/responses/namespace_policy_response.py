"""Namespace policy response model.

ONLY policy views.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Optional

from pydantic import BaseModel


class NamespacePolicyResponse(BaseModel):
    """Namespace policy as exposed over HTTP."""

    domain: str
    key_prefix: str
    key_suffix: Optional[str] = None
    separator: str
    default_ttl_seconds: int
    eviction_policy: str
    hit_threshold_alert: Optional[float] = None
