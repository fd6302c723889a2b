"""Distributed lock service.

ONLY lock-protected execution - runs a routine while holding a quorum
lock, keeps the lease alive and always releases it afterwards.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable, Optional, Sequence, Tuple, TypeVar

from ...config.settings import RedisLockSettings
from ...core.exceptions import LockAcquisitionTimeout
from ...core.value_objects.lock_lease import LockLease
from ...infrastructure.locks.redlock import Redlock
from .cache_notification_service import CacheNotificationService

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LockContentionContext:
    """What a lock protects, reported when acquisition gives up."""

    domain: str
    tenant_id: Optional[str] = None
    keys: Tuple[str, ...] = field(default_factory=tuple)


class DistributedLockService:
    """Runs routines under a quorum lock.

    While the routine runs the lease is extended whenever its remaining
    validity drops below ``automatic_extension_threshold_ms``. If an
    extension fails the lease is marked aborted and the routine keeps
    running; it should check ``lease.aborted`` before touching shared state.
    """

    def __init__(
        self,
        redlock: Redlock,
        settings: Optional[RedisLockSettings] = None,
        notification_service: Optional[CacheNotificationService] = None,
    ):
        self.redlock = redlock
        self.settings = settings or redlock.settings
        self.notification_service = notification_service

    async def with_lock(
        self,
        resource_keys: Sequence[str],
        duration_ms: Optional[int],
        routine: Callable[[LockLease], Awaitable[T]],
        *,
        contention_context: Optional[LockContentionContext] = None,
        timeout_seconds: Optional[float] = None,
    ) -> T:
        """Run ``routine(lease)`` exactly once while holding the lock.

        Args:
            resource_keys: Lock resources, acquired all-or-nothing
            duration_ms: Lease duration, defaults to the configured duration
            routine: Coroutine function receiving the lease
            contention_context: Published as lock contention on timeout
            timeout_seconds: Optional bound on the routine's run time

        Raises:
            LockAcquisitionTimeout: When the lock could not be acquired
            asyncio.TimeoutError: When the routine exceeded ``timeout_seconds``
        """
        async with self.hold(resource_keys, duration_ms, contention_context=contention_context) as lease:
            if timeout_seconds is not None:
                return await asyncio.wait_for(routine(lease), timeout_seconds)
            return await routine(lease)

    @asynccontextmanager
    async def hold(
        self,
        resource_keys: Sequence[str],
        duration_ms: Optional[int] = None,
        *,
        contention_context: Optional[LockContentionContext] = None,
    ) -> AsyncIterator[LockLease]:
        """Hold a lock for the duration of an ``async with`` block."""
        duration = duration_ms or self.settings.default_lock_duration_ms

        try:
            lease = await self.redlock.acquire(resource_keys, duration)
        except LockAcquisitionTimeout as e:
            await self._report_contention(e, contention_context)
            raise

        extender = asyncio.create_task(self._auto_extend(lease))
        try:
            yield lease
        finally:
            extender.cancel()
            try:
                await extender
            except asyncio.CancelledError:
                pass
            try:
                await self.redlock.release(lease)
            except Exception as e:
                logger.warning(f"Failed to release lock on {list(lease.resource_keys)}: {e}")

    async def _auto_extend(self, lease: LockLease) -> None:
        # Never extend more often than twice per lease
        threshold = min(self.settings.automatic_extension_threshold_ms, lease.duration_ms / 2)
        while True:
            delay_ms = max(1.0, lease.remaining_ms() - threshold)
            await asyncio.sleep(delay_ms / 1000)
            try:
                await self.redlock.extend(lease)
            except Exception as e:
                lease.mark_aborted(e)
                logger.warning(f"Lock extension failed on {list(lease.resource_keys)}, lease aborted: {e}")
                return

    async def _report_contention(
        self,
        error: LockAcquisitionTimeout,
        context: Optional[LockContentionContext],
    ) -> None:
        if self.notification_service is None or context is None:
            return
        try:
            await self.notification_service.publish_lock_contention(
                domain=context.domain,
                tenant_id=context.tenant_id,
                keys=context.keys,
                lock_resources=error.resources,
                attempts=error.attempts,
            )
        except Exception as e:
            logger.error(f"Failed to publish lock contention for domain '{context.domain}': {e}")
