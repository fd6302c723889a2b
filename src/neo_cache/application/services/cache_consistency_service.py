"""Cache consistency service.

ONLY write-path invalidation - delayed double delete: lock the key set,
delete, notify, release, then delete again after a delay to clear values
repopulated from a stale read in the meantime.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Set

from ...config.constants import DEFAULT_DOUBLE_DELETE_DELAY_MS, INVALIDATION_LOCK_PREFIX
from ...core.exceptions import CacheOperationError, NamespacePolicyNotFound
from ...core.protocols.cache_client import CacheClient
from ...core.value_objects.invalidation_command import InvalidationCommand, InvalidationReceipt
from ...core.value_objects.lock_lease import LockLease
from ...infrastructure.clients.cache_client_provider import CacheClientProvider
from ..validators import validate_invalidation_command
from .cache_namespace_registry import CacheNamespaceRegistry
from .cache_notification_service import CacheNotificationService
from .distributed_lock_service import DistributedLockService, LockContentionContext

logger = logging.getLogger(__name__)


class CacheConsistencyService:
    """Write-path cache invalidation with delayed double delete.

    Ordering per invalidation: first delete, notification, lock release,
    second delete. The second delete is best effort and lives only in this
    process; key TTLs bound staleness if it never runs.
    """

    def __init__(
        self,
        registry: CacheNamespaceRegistry,
        client_provider: CacheClientProvider,
        lock_service: DistributedLockService,
        notification_service: Optional[CacheNotificationService] = None,
        double_delete_delay_ms: int = DEFAULT_DOUBLE_DELETE_DELAY_MS,
        lock_duration_ms: Optional[int] = None,
    ):
        self.registry = registry
        self.client_provider = client_provider
        self.lock_service = lock_service
        self.notification_service = notification_service
        self.double_delete_delay_ms = double_delete_delay_ms
        self.lock_duration_ms = lock_duration_ms
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        """Number of second deletes not yet finished."""
        return len(self._pending)

    async def invalidate(self, command: InvalidationCommand) -> InvalidationReceipt:
        """Invalidate keys after a write.

        Raises:
            InvalidCacheCommand: If the command is invalid
            NamespacePolicyNotFound: If the domain has no policy
            MissingClientConfiguration: If the client cannot be resolved
            LockAcquisitionTimeout: If the key set is locked; nothing was deleted
            CacheOperationError: If the first delete failed
        """
        validate_invalidation_command(command).raise_if_invalid()

        if self.registry.get(command.domain) is None:
            raise NamespacePolicyNotFound(command.domain)

        client = self.client_provider.get_client(command.client_key)
        physical_keys = self._physical_keys(command)
        resources = sorted({f"{INVALIDATION_LOCK_PREFIX}:{key}" for key in physical_keys})
        request_id = command.request_id or str(uuid.uuid4())
        delay_ms = self.double_delete_delay_ms if command.delay_ms is None else command.delay_ms

        async def first_phase(lease: LockLease) -> None:
            if lease.aborted:
                raise CacheOperationError(
                    operation="invalidate",
                    message="Lock lease was lost before invalidation",
                    details={"request_id": request_id},
                    cause=lease.error,
                )

            await self._delete(client, physical_keys, command, request_id, phase="first")

            if command.notify and self.notification_service is not None:
                try:
                    await self.notification_service.publish_invalidation(
                        domain=command.domain,
                        tenant_id=command.tenant_id,
                        keys=command.keys,
                        reason=command.reason,
                        request_id=request_id,
                    )
                except Exception as e:
                    logger.error(
                        f"Cache invalidation notification failed for request {request_id}: {e}",
                        extra={"domain": command.domain, "tenant_id": command.tenant_id},
                    )

        await self.lock_service.with_lock(
            resources,
            command.lock_duration_ms or self.lock_duration_ms,
            first_phase,
            contention_context=LockContentionContext(
                domain=command.domain,
                tenant_id=command.tenant_id,
                keys=command.keys,
            ),
        )

        scheduled_at = datetime.now(timezone.utc)
        self._schedule_second_delete(client, physical_keys, command, request_id, delay_ms)

        logger.info(
            f"Cache invalidation {request_id} completed first delete of {len(physical_keys)} keys "
            f"for domain '{command.domain}', second delete in {delay_ms}ms",
            extra={"domain": command.domain, "tenant_id": command.tenant_id, "reason": command.reason},
        )
        return InvalidationReceipt(
            request_id=request_id,
            scheduled_at=scheduled_at,
            second_delete_at=scheduled_at + timedelta(milliseconds=delay_ms),
            keys=tuple(physical_keys),
        )

    async def wait_for_pending(self) -> None:
        """Wait until every scheduled second delete has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def shutdown(self) -> None:
        """Drain scheduled second deletes before the process stops."""
        if self._pending:
            logger.info(f"Draining {len(self._pending)} pending cache second deletes")
        await self.wait_for_pending()

    def _physical_keys(self, command: InvalidationCommand) -> List[str]:
        qualified = [self.client_provider.qualify_key(key.strip(), command.client_key) for key in command.keys]
        return list(dict.fromkeys(qualified))

    def _schedule_second_delete(
        self,
        client: CacheClient,
        keys: List[str],
        command: InvalidationCommand,
        request_id: str,
        delay_ms: int,
    ) -> None:
        task = asyncio.create_task(self._second_delete(client, keys, command, request_id, delay_ms))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _second_delete(
        self,
        client: CacheClient,
        keys: List[str],
        command: InvalidationCommand,
        request_id: str,
        delay_ms: int,
    ) -> None:
        await asyncio.sleep(delay_ms / 1000)
        try:
            await self._delete(client, keys, command, request_id, phase="second")
        except CacheOperationError as e:
            logger.error(f"Second delete for invalidation {request_id} failed: {e.message}")

    async def _delete(
        self,
        client: CacheClient,
        keys: List[str],
        command: InvalidationCommand,
        request_id: str,
        phase: str,
    ) -> int:
        try:
            removed = await client.delete(*keys)
        except Exception as e:
            raise CacheOperationError(
                operation="delete",
                message=f"Failed {phase} delete of invalidated cache keys",
                details={"request_id": request_id, "domain": command.domain, "phase": phase},
                cause=e,
            ) from e

        logger.debug(f"Invalidation {request_id} {phase} delete removed {removed}/{len(keys)} keys")
        return removed
