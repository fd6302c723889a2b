"""Cache read service.

ONLY read-through caching - serves keys from the cache and, on a miss,
loads them from the origin under a distributed lock so concurrent callers
trigger a single load.

Following maximum separation architecture - one file = one purpose.
"""

import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from ...config.constants import LOAD_LOCK_PREFIX
from ...core.exceptions import CacheOperationError, InvalidCacheCommand
from ...core.protocols.cache_client import CacheClient
from ...core.protocols.cache_serializer import CacheSerializer
from ...core.value_objects.lock_lease import LockLease
from ...infrastructure.clients.cache_client_provider import CacheClientProvider
from ...infrastructure.serializers.json_serializer import JSONCacheSerializer
from ..monitoring.cache_metrics_hook import CacheMetricsHook
from .cache_namespace_registry import CacheNamespaceRegistry
from .distributed_lock_service import DistributedLockService, LockContentionContext

logger = logging.getLogger(__name__)

T = TypeVar("T")
Loader = Callable[[], Union[T, Awaitable[T]]]

_MISS = object()


class CacheReadService:
    """Read-through cache with single-flight origin loads.

    1. Lock-free read; a hit returns immediately.
    2. On a miss, take the load lock for the key.
    3. Re-read under the lock; a peer may have filled it meanwhile.
    4. Call the loader and record origin latency.
    5. Serialize and store with the TTL.

    Loader exceptions are recorded and re-raised unchanged; nothing is
    cached for a failed load.
    """

    def __init__(
        self,
        client_provider: CacheClientProvider,
        lock_service: DistributedLockService,
        metrics: CacheMetricsHook,
        registry: Optional[CacheNamespaceRegistry] = None,
        serializer: Optional[CacheSerializer] = None,
        lock_duration_ms: Optional[int] = None,
    ):
        self.client_provider = client_provider
        self.lock_service = lock_service
        self.metrics = metrics
        self.registry = registry
        self.serializer = serializer or JSONCacheSerializer()
        self.lock_duration_ms = lock_duration_ms

    async def get_or_load(
        self,
        domain: str,
        key: str,
        tenant_id: Optional[str],
        ttl_seconds: Optional[int],
        loader: Loader,
        *,
        client_key: Optional[str] = None,
        serializer: Optional[CacheSerializer] = None,
    ) -> Any:
        """Return the cached value for ``key`` or load, cache and return it.

        Args:
            domain: Namespace domain, used for metrics and TTL defaults
            key: Logical cache key
            tenant_id: Tenant for metrics context
            ttl_seconds: Expiry; None uses the policy default
            loader: Origin loader returning a value or an awaitable
            client_key: Cache client to use
            serializer: Codec overriding the default JSON serializer

        Raises:
            InvalidCacheCommand: If the key is blank or the loader missing
            LockAcquisitionTimeout: If the load lock could not be acquired
            CacheOperationError: On store or codec failures
        """
        self._validate(domain, key, loader)
        codec = serializer or self.serializer
        client = self.client_provider.get_client(client_key)
        physical_key = self.client_provider.qualify_key(key, client_key)

        cached = await self._read(client, physical_key, codec, domain, tenant_id)
        if cached is not _MISS:
            self.metrics.record_hit(domain, tenant_id, extra={"key": physical_key})
            logger.debug(f"Cache hit for '{physical_key}'")
            return cached

        self.metrics.record_miss(domain, tenant_id, extra={"key": physical_key})
        logger.debug(f"Cache miss for '{physical_key}', loading from origin")

        async def load_under_lock(lease: LockLease) -> Any:
            self.metrics.record_lock_wait(domain, lease.wait_ms, tenant_id, extra={"key": physical_key})

            refreshed = await self._read(client, physical_key, codec, domain, tenant_id)
            if refreshed is not _MISS:
                logger.debug(f"Cache for '{physical_key}' filled while waiting for the load lock")
                return refreshed

            value = await self._load(loader, domain, tenant_id, physical_key)
            await self._persist(
                client,
                physical_key,
                value,
                self._resolve_ttl(domain, ttl_seconds),
                codec,
                domain,
                tenant_id,
            )
            return value

        return await self.lock_service.with_lock(
            [f"{LOAD_LOCK_PREFIX}:{physical_key}"],
            self.lock_duration_ms,
            load_under_lock,
            contention_context=LockContentionContext(domain=domain, tenant_id=tenant_id, keys=(key,)),
        )

    def _resolve_ttl(self, domain: str, ttl_seconds: Optional[int]) -> Optional[int]:
        if ttl_seconds is not None:
            return ttl_seconds
        if self.registry is None:
            return None
        policy = self.registry.get(domain)
        return policy.default_ttl_seconds if policy else None

    async def _read(
        self,
        client: CacheClient,
        key: str,
        codec: CacheSerializer,
        domain: str,
        tenant_id: Optional[str],
    ) -> Any:
        try:
            raw = await client.get(key)
        except Exception as e:
            self.metrics.record_failure(domain, e, tenant_id, extra={"key": key, "stage": "read"})
            raise CacheOperationError(
                operation="get",
                message="Failed to read from cache",
                details={"key": key},
                cause=e,
            ) from e

        if raw is None:
            return _MISS

        try:
            return codec.deserialize(raw)
        except Exception as e:
            self.metrics.record_failure(domain, e, tenant_id, extra={"key": key, "stage": "deserialize"})
            if isinstance(e, CacheOperationError):
                raise
            raise CacheOperationError(
                operation="deserialize",
                message="Failed to deserialize cached value",
                details={"key": key},
                cause=e,
            ) from e

    async def _load(self, loader: Loader, domain: str, tenant_id: Optional[str], key: str) -> Any:
        started = time.perf_counter()
        try:
            value = loader()
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:
            self.metrics.record_failure(domain, e, tenant_id, extra={"key": key, "stage": "loader"})
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        self.metrics.record_origin_latency(domain, elapsed_ms, tenant_id, extra={"key": key})
        return value

    async def _persist(
        self,
        client: CacheClient,
        key: str,
        value: Any,
        ttl_seconds: Optional[int],
        codec: CacheSerializer,
        domain: str,
        tenant_id: Optional[str],
    ) -> None:
        try:
            payload = codec.serialize(value)
            if ttl_seconds is not None and ttl_seconds > 0:
                await client.set(key, payload, ex=ttl_seconds)
            else:
                await client.set(key, payload)
        except Exception as e:
            self.metrics.record_failure(domain, e, tenant_id, extra={"key": key, "stage": "persist"})
            if isinstance(e, CacheOperationError):
                raise
            raise CacheOperationError(
                operation="set",
                message="Failed to write value to cache",
                details={"key": key},
                cause=e,
            ) from e

    @staticmethod
    def _validate(domain: str, key: str, loader: Any) -> None:
        issues = []
        if not isinstance(domain, str) or not domain.strip():
            issues.append({"field": "domain", "message": "domain is required"})
        if not isinstance(key, str) or not key.strip():
            issues.append({"field": "key", "message": "cache key cannot be empty"})
        if not callable(loader):
            issues.append({"field": "loader", "message": "loader must be callable"})
        if issues:
            raise InvalidCacheCommand(issues)
