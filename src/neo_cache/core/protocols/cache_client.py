"""Cache client protocol.

ONLY cache store contract - the subset of redis.asyncio.Redis the engine
relies on, so an in-memory client can stand in for it.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Optional, Union
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class CacheClient(Protocol):
    """Cache client protocol.

    Values are strings (clients run with ``decode_responses=True``).
    """

    async def get(self, name: str) -> Optional[str]:
        """Get value by key, None when missing or expired."""
        ...

    async def set(self, name: str, value: Union[str, bytes], ex: Optional[int] = None) -> Any:
        """Set value, expiring after ``ex`` seconds when given."""
        ...

    async def delete(self, *names: str) -> int:
        """Delete keys, returning how many existed."""
        ...

    async def ttl(self, name: str) -> int:
        """Seconds to live; -1 without expiry, -2 when missing."""
        ...
