"""In-memory cache client.

ONLY local key/value storage - a process-local stand-in for Redis used
when no Redis client is configured, and in tests.

Following maximum separation architecture - one file = one purpose.
"""

import time
from typing import Any, Dict, Optional, Tuple, Union


class MemoryCacheClient:
    """Dictionary-backed cache client with lazy expiry.

    Implements the ``get``/``set``/``delete``/``ttl`` subset of the Redis
    client API with the same return conventions.
    """

    def __init__(self):
        self._store: Dict[str, Tuple[str, Optional[float]]] = {}

    async def get(self, name: str) -> Optional[str]:
        entry = self._live_entry(name)
        return entry[0] if entry else None

    async def set(
        self,
        name: str,
        value: Union[str, bytes],
        ex: Optional[int] = None,
        px: Optional[int] = None,
        nx: bool = False,
    ) -> Optional[bool]:
        if nx and self._live_entry(name) is not None:
            return None

        if isinstance(value, bytes):
            value = value.decode("utf-8")

        expires_at = None
        if ex is not None and ex > 0:
            expires_at = time.monotonic() + ex
        elif px is not None and px > 0:
            expires_at = time.monotonic() + px / 1000

        self._store[name] = (value, expires_at)
        return True

    async def delete(self, *names: str) -> int:
        removed = 0
        for name in names:
            if self._live_entry(name) is not None:
                removed += 1
            self._store.pop(name, None)
        return removed

    async def ttl(self, name: str) -> int:
        entry = self._live_entry(name)
        if entry is None:
            return -2
        if entry[1] is None:
            return -1
        return max(0, round(entry[1] - time.monotonic()))

    async def exists(self, *names: str) -> int:
        return sum(1 for name in names if self._live_entry(name) is not None)

    async def flushdb(self) -> bool:
        self._store.clear()
        return True

    async def aclose(self) -> None:
        self._store.clear()

    def _live_entry(self, name: str) -> Optional[Tuple[str, Optional[float]]]:
        entry = self._store.get(name)
        if entry is None:
            return None
        if entry[1] is not None and entry[1] <= time.monotonic():
            del self._store[name]
            return None
        return entry

    def __len__(self) -> int:
        return sum(1 for name in list(self._store) if self._live_entry(name) is not None)

    def __repr__(self) -> str:
        return f"MemoryCacheClient(keys={len(self)})"
