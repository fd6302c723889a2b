"""Cache notification service.

ONLY cache notifications - broadcasts invalidation, lock contention and
prefetch events over a notification channel with at-least-once retries.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ...config.settings import NotificationSettings
from ...core.events import CacheInvalidated, LockContention, PrefetchRequested
from ...core.exceptions import CacheOperationError
from ...core.protocols.notification_channel import NotificationChannel
from ...core.value_objects.prefetch_result import PrefetchFailure, PrefetchResult
from ..validators import validate_prefetch_request

logger = logging.getLogger(__name__)


@dataclass
class PublishRetryPolicy:
    """Retry behavior for notification publishing."""

    max_attempts: int = 3
    initial_delay_ms: int = 50
    max_delay_ms: int = 2_000
    jitter: bool = True

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay_ms < 0:
            raise ValueError("initial_delay_ms must be non-negative")

    def calculate_delay(self, attempt: int) -> int:
        """Exponential delay in milliseconds after a failed attempt (1-based)."""
        if attempt <= 0:
            return 0
        delay = min(self.initial_delay_ms * (2 ** (attempt - 1)), self.max_delay_ms)
        if self.jitter and delay > 0:
            jitter_range = int(delay * 0.1)
            delay = max(0, delay + random.randint(-jitter_range, jitter_range))
        return delay

    @classmethod
    def from_settings(cls, settings: NotificationSettings) -> "PublishRetryPolicy":
        return cls(
            max_attempts=settings.publish_attempts,
            initial_delay_ms=settings.publish_retry_delay_ms,
        )


class CacheNotificationService:
    """Publishes cache notifications.

    Delivery is at least once: a publish that fails is retried, so a
    message may reach consumers more than once. Consumers deduplicate on
    ``event_id``.
    """

    def __init__(
        self,
        channel: NotificationChannel,
        retry_policy: Optional[PublishRetryPolicy] = None,
    ):
        self.channel = channel
        self.retry_policy = retry_policy or PublishRetryPolicy()

    async def publish_invalidation(
        self,
        domain: str,
        tenant_id: str,
        keys: Sequence[str],
        reason: str,
        request_id: Optional[str] = None,
    ) -> str:
        """Broadcast that keys were invalidated.

        Returns:
            Channel message ID
        """
        event = CacheInvalidated(
            domain=domain,
            tenant_id=tenant_id,
            keys=tuple(keys),
            reason=reason,
            request_id=request_id,
        )
        message_id = await self._publish(event.get_event_type(), event.to_dict())
        logger.info(
            f"Cache invalidation published for domain '{domain}' ({len(event.keys)} keys)",
            extra={"domain": domain, "tenant_id": tenant_id, "request_id": request_id},
        )
        return message_id

    async def publish_lock_contention(
        self,
        domain: str,
        tenant_id: Optional[str],
        keys: Sequence[str],
        lock_resources: Sequence[str],
        attempts: int = 0,
    ) -> str:
        """Raise a lock contention alert."""
        event = LockContention(
            domain=domain,
            tenant_id=tenant_id,
            keys=tuple(keys),
            lock_resources=tuple(lock_resources),
            attempts=attempts,
        )
        logger.warning(
            f"Cache lock contention on domain '{domain}'",
            extra={"domain": domain, "tenant_id": tenant_id, "lock_resources": list(lock_resources)},
        )
        return await self._publish(event.get_event_type(), event.to_dict())

    async def publish_prefetch_requested(
        self,
        domain: str,
        tenant_id: str,
        keys: Sequence[str],
        bypass_lock: bool = False,
        request_id: Optional[str] = None,
    ) -> PrefetchResult:
        """Publish one prefetch message per key.

        Keys whose message could not be published are reported as failures
        instead of failing the whole request.

        Raises:
            InvalidCacheCommand: If domain, tenant or keys are invalid
        """
        validate_prefetch_request(domain, tenant_id, keys).raise_if_invalid()

        refreshed = 0
        failures: List[PrefetchFailure] = []
        for key in keys:
            event = PrefetchRequested(
                domain=domain,
                tenant_id=tenant_id,
                key=key,
                bypass_lock=bypass_lock,
                request_id=request_id,
            )
            try:
                await self._publish(event.get_event_type(), event.to_dict())
                refreshed += 1
            except CacheOperationError as e:
                failures.append(PrefetchFailure(key=key, reason=e.message))

        logger.info(
            f"Cache prefetch requested for domain '{domain}': {refreshed} queued, {len(failures)} failed",
            extra={"domain": domain, "tenant_id": tenant_id},
        )
        return PrefetchResult(refreshed=refreshed, failures=failures)

    async def _publish(self, topic: str, payload: Dict[str, Any]) -> str:
        last_error: Optional[Exception] = None
        for attempt in range(1, self.retry_policy.max_attempts + 1):
            try:
                return await self.channel.publish(topic, payload)
            except Exception as e:
                last_error = e
                logger.warning(
                    f"Publishing to '{topic}' failed (attempt {attempt}/{self.retry_policy.max_attempts}): {e}"
                )
                if attempt < self.retry_policy.max_attempts:
                    await asyncio.sleep(self.retry_policy.calculate_delay(attempt) / 1000)

        raise CacheOperationError(
            operation="publish",
            message=f"Failed to publish notification to '{topic}'",
            details={"topic": topic, "attempts": self.retry_policy.max_attempts},
            cause=last_error,
        ) from last_error
