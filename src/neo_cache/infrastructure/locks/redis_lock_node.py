"""Redis lock node.

ONLY single Redis node locking - runs the acquire/extend/release Lua
scripts against one independent Redis instance.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Optional, Sequence

from redis.asyncio import Redis

from .lock_scripts import ACQUIRE_SCRIPT, EXTEND_SCRIPT, RELEASE_SCRIPT

logger = logging.getLogger(__name__)


class RedisLockNode:
    """Lock node backed by one Redis instance.

    Connection errors propagate; the quorum lock counts them as a lost vote.
    """

    def __init__(self, redis_client: Redis, name: Optional[str] = None):
        self._redis = redis_client
        self._name = name or repr(redis_client)
        self._acquire = redis_client.register_script(ACQUIRE_SCRIPT)
        self._extend = redis_client.register_script(EXTEND_SCRIPT)
        self._release = redis_client.register_script(RELEASE_SCRIPT)

    @property
    def name(self) -> str:
        return self._name

    async def acquire(self, resources: Sequence[str], value: str, duration_ms: int) -> bool:
        result = await self._acquire(keys=list(resources), args=[value, int(duration_ms)])
        return int(result) == len(resources)

    async def extend(self, resources: Sequence[str], value: str, duration_ms: int) -> bool:
        result = await self._extend(keys=list(resources), args=[value, int(duration_ms)])
        return int(result) == len(resources)

    async def release(self, resources: Sequence[str], value: str) -> bool:
        result = await self._release(keys=list(resources), args=[value])
        released = int(result)
        if released != len(resources):
            logger.debug(f"Lock node {self._name} released {released}/{len(resources)} resources")
        return released > 0

    async def aclose(self) -> None:
        await self._redis.aclose()
