"""Quorum lock.

ONLY distributed lock algorithm - acquires, extends and releases a lock
across N independent lock nodes, requiring a majority to agree.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
import random
import secrets
from typing import Awaitable, Callable, List, Optional, Sequence

from ...config.settings import RedisLockSettings
from ...core.exceptions import CacheOperationError, LockAcquisitionTimeout
from ...core.protocols.lock_node import LockNode
from ...core.value_objects.lock_lease import LockLease, LockState, monotonic_ms

logger = logging.getLogger(__name__)

NodeOperation = Callable[[LockNode], Awaitable[bool]]


class Redlock:
    """Quorum lock across independent lock nodes.

    A lock is held when ``len(nodes) // 2 + 1`` nodes accepted it and the
    time spent acquiring left some validity. Validity is reduced by a clock
    drift allowance of ``drift_factor * duration + 2ms``.
    """

    def __init__(self, nodes: Sequence[LockNode], settings: Optional[RedisLockSettings] = None):
        if not nodes:
            raise ValueError("Redlock requires at least one lock node")
        self.nodes: List[LockNode] = list(nodes)
        self.settings = settings or RedisLockSettings()

    @property
    def quorum(self) -> int:
        return len(self.nodes) // 2 + 1

    def drift_ms(self, duration_ms: int) -> int:
        """Clock drift allowance for a lease duration."""
        return round(self.settings.drift_factor * duration_ms) + 2

    def retry_delay_seconds(self) -> float:
        """Retry delay with jitter applied, never negative."""
        jitter = self.settings.retry_jitter_ms
        delay_ms = self.settings.retry_delay_ms + random.uniform(-jitter, jitter)
        return max(0.0, delay_ms) / 1000

    async def acquire(self, resources: Sequence[str], duration_ms: int) -> LockLease:
        """Acquire a lock on every resource.

        Raises:
            LockAcquisitionTimeout: When retries are exhausted
        """
        resource_keys = tuple(resources)
        if not resource_keys:
            raise ValueError("At least one lock resource is required")

        lease = LockLease(
            resource_keys=resource_keys,
            value=secrets.token_hex(16),
            duration_ms=duration_ms,
        )
        max_attempts = self.settings.retry_count + 1
        wait_started = monotonic_ms()

        while True:
            lease.attempts += 1
            started = monotonic_ms()
            votes = await self._vote(
                lambda node: node.acquire(resource_keys, lease.value, duration_ms)
            )
            expiration = started + duration_ms - self.drift_ms(duration_ms)

            if votes >= self.quorum and monotonic_ms() < expiration:
                lease.expiration = expiration
                lease.state = LockState.ACQUIRED
                lease.wait_ms = monotonic_ms() - wait_started
                logger.debug(
                    f"Lock acquired on {len(resource_keys)} resource(s) "
                    f"after {lease.attempts} attempt(s), votes={votes}/{len(self.nodes)}"
                )
                return lease

            # Undo partial acquisition before retrying
            await self._vote(lambda node: node.release(resource_keys, lease.value))

            if lease.attempts >= max_attempts:
                lease.state = LockState.FAILED
                elapsed = monotonic_ms() - wait_started
                logger.warning(
                    f"Lock acquisition failed on {list(resource_keys)} "
                    f"after {lease.attempts} attempt(s) ({elapsed:.0f}ms)"
                )
                raise LockAcquisitionTimeout(resource_keys, lease.attempts, elapsed)

            await asyncio.sleep(self.retry_delay_seconds())

    async def extend(self, lease: LockLease, duration_ms: Optional[int] = None) -> LockLease:
        """Extend a held lease.

        Raises:
            CacheOperationError: When a quorum could not extend the lease in time
        """
        duration = duration_ms or lease.duration_ms
        started = monotonic_ms()
        votes = await self._vote(
            lambda node: node.extend(lease.resource_keys, lease.value, duration)
        )
        expiration = started + duration - self.drift_ms(duration)

        if votes < self.quorum or monotonic_ms() >= expiration:
            lease.state = LockState.EXPIRED
            raise CacheOperationError(
                operation="extend_lock",
                message="Lock lease could not be extended",
                details={"resources": list(lease.resource_keys), "votes": votes, "quorum": self.quorum},
            )

        lease.expiration = expiration
        lease.duration_ms = duration
        lease.extensions += 1
        lease.state = LockState.EXTENDED
        return lease

    async def release(self, lease: LockLease) -> bool:
        """Release a lease on every node.

        Returns:
            True when a quorum confirmed the release
        """
        votes = await self._vote(lambda node: node.release(lease.resource_keys, lease.value))
        lease.state = LockState.RELEASED
        if votes < self.quorum:
            logger.debug(
                f"Lock release confirmed by {votes}/{len(self.nodes)} nodes, "
                f"remaining entries expire on their own"
            )
            return False
        return True

    async def _vote(self, operation: NodeOperation) -> int:
        results = await asyncio.gather(*(self._attempt(node, operation) for node in self.nodes))
        return sum(1 for accepted in results if accepted)

    @staticmethod
    async def _attempt(node: LockNode, operation: NodeOperation) -> bool:
        try:
            return bool(await operation(node))
        except Exception as e:
            logger.warning(f"Lock node {node.name} failed: {e}")
            return False
