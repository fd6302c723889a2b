"""In-memory lock node.

ONLY process-local locking - mirrors the Redis lock scripts over a
dictionary for single-process deployments and tests.

Following maximum separation architecture - one file = one purpose.
"""

import time
from typing import Dict, Optional, Sequence, Tuple


class MemoryLockNode:
    """Lock node keeping leases in process memory."""

    def __init__(self, name: str = "memory"):
        self._name = name
        self._leases: Dict[str, Tuple[str, float]] = {}

    @property
    def name(self) -> str:
        return self._name

    async def acquire(self, resources: Sequence[str], value: str, duration_ms: int) -> bool:
        if any(self._holder(resource) is not None for resource in resources):
            return False
        self._set(resources, value, duration_ms)
        return True

    async def extend(self, resources: Sequence[str], value: str, duration_ms: int) -> bool:
        if any(self._holder(resource) != value for resource in resources):
            return False
        self._set(resources, value, duration_ms)
        return True

    async def release(self, resources: Sequence[str], value: str) -> bool:
        released = 0
        for resource in resources:
            if self._holder(resource) == value:
                del self._leases[resource]
                released += 1
        return released > 0

    def is_locked(self, resource: str) -> bool:
        return self._holder(resource) is not None

    def _set(self, resources: Sequence[str], value: str, duration_ms: int) -> None:
        expires_at = time.monotonic() + duration_ms / 1000
        for resource in resources:
            self._leases[resource] = (value, expires_at)

    def _holder(self, resource: str) -> Optional[str]:
        lease = self._leases.get(resource)
        if lease is None:
            return None
        if lease[1] <= time.monotonic():
            del self._leases[resource]
            return None
        return lease[0]
