"""Tests for delayed double-delete invalidation."""

import asyncio

import pytest
from unittest.mock import AsyncMock

from neo_cache.application.services.cache_consistency_service import CacheConsistencyService
from neo_cache.application.services.cache_notification_service import CacheNotificationService, PublishRetryPolicy
from neo_cache.config.constants import INVALIDATION_TOPIC, LOCK_CONTENTION_TOPIC
from neo_cache.config.settings import RedisClientSettings
from neo_cache.core.exceptions import (
    CacheOperationError,
    InvalidCacheCommand,
    LockAcquisitionTimeout,
    MissingClientConfiguration,
    NamespacePolicyNotFound,
)
from neo_cache.core.value_objects.invalidation_command import InvalidationCommand
from neo_cache.infrastructure.clients.cache_client_provider import CacheClientProvider
from neo_cache.infrastructure.clients.memory_cache_client import MemoryCacheClient


def make_command(**overrides):
    values = dict(
        domain="tenant-config",
        tenant_id="t1",
        keys=["tenant-config:t1:config"],
        reason="tenant updated",
    )
    values.update(overrides)
    return InvalidationCommand(**values)


class RecordingClient(MemoryCacheClient):
    """Memory client recording lock state whenever keys are deleted."""

    def __init__(self, lock_node, fail_on_call=None):
        super().__init__()
        self.lock_node = lock_node
        self.fail_on_call = fail_on_call
        self.deletes = []

    async def delete(self, *names):
        self.deletes.append({
            "names": names,
            "locked": any(self.lock_node.is_locked(f"lock:invalidate:{name}") for name in names),
        })
        if self.fail_on_call == len(self.deletes):
            raise ConnectionError("redis down")
        return await super().delete(*names)


class TestCacheConsistencyService:
    """Test the write-path invalidation."""

    @pytest.mark.asyncio
    async def test_first_delete_and_receipt(self, consistency_service, memory_client):
        await memory_client.set("tenant-config:t1:config", "stale")

        receipt = await consistency_service.invalidate(make_command(delay_ms=50, request_id="req-1"))

        assert await memory_client.get("tenant-config:t1:config") is None
        assert receipt.request_id == "req-1"
        assert receipt.keys == ("tenant-config:t1:config",)
        assert (receipt.second_delete_at - receipt.scheduled_at).total_seconds() * 1000 == pytest.approx(50)
        await consistency_service.wait_for_pending()

    @pytest.mark.asyncio
    async def test_second_delete_clears_stale_repopulation(self, consistency_service, memory_client):
        await consistency_service.invalidate(make_command(delay_ms=30))

        # A reader that loaded before the write repopulates the old value
        await memory_client.set("tenant-config:t1:config", "stale")
        assert consistency_service.pending_count == 1

        await consistency_service.wait_for_pending()

        assert await memory_client.get("tenant-config:t1:config") is None
        assert consistency_service.pending_count == 0

    @pytest.mark.asyncio
    async def test_default_delay_and_generated_request_id(self, consistency_service):
        receipt = await consistency_service.invalidate(make_command())

        assert receipt.request_id
        assert (receipt.second_delete_at - receipt.scheduled_at).total_seconds() * 1000 == pytest.approx(20)
        await consistency_service.wait_for_pending()

    @pytest.mark.asyncio
    async def test_second_delete_runs_after_lock_release(
        self, registry, lock_service, notification_service, lock_node
    ):
        client = RecordingClient(lock_node)
        service = CacheConsistencyService(
            registry, CacheClientProvider({"default": client}), lock_service, notification_service
        )

        await service.invalidate(make_command(delay_ms=0))
        await service.wait_for_pending()

        assert [delete["locked"] for delete in client.deletes] == [True, False]

    @pytest.mark.asyncio
    async def test_keys_are_deduplicated(self, registry, lock_service, notification_service, lock_node):
        client = RecordingClient(lock_node)
        service = CacheConsistencyService(
            registry, CacheClientProvider({"default": client}), lock_service, notification_service
        )

        await service.invalidate(make_command(keys=["b", " a", "b", "a"], delay_ms=0))
        await service.wait_for_pending()

        assert client.deletes[0]["names"] == ("b", "a")

    @pytest.mark.asyncio
    async def test_publishes_invalidation(self, consistency_service, notification_channel):
        await consistency_service.invalidate(make_command(request_id="req-2"))
        await consistency_service.wait_for_pending()

        messages = notification_channel.messages(INVALIDATION_TOPIC)
        assert len(messages) == 1
        assert messages[0]["request_id"] == "req-2"
        assert messages[0]["keys"] == ["tenant-config:t1:config"]
        assert messages[0]["reason"] == "tenant updated"

    @pytest.mark.asyncio
    async def test_notify_false_skips_notification(self, consistency_service, notification_channel):
        await consistency_service.invalidate(make_command(notify=False))
        await consistency_service.wait_for_pending()

        assert notification_channel.messages(INVALIDATION_TOPIC) == []

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_fail_invalidation(
        self, registry, client_provider, lock_service, memory_client
    ):
        channel = AsyncMock()
        channel.publish.side_effect = ConnectionError("stream down")
        notifications = CacheNotificationService(
            channel, PublishRetryPolicy(max_attempts=2, initial_delay_ms=0, jitter=False)
        )
        service = CacheConsistencyService(registry, client_provider, lock_service, notifications)
        await memory_client.set("tenant-config:t1:config", "stale")

        receipt = await service.invalidate(make_command(delay_ms=0))
        await service.wait_for_pending()

        assert receipt.request_id
        assert channel.publish.await_count == 2
        assert await memory_client.get("tenant-config:t1:config") is None

    @pytest.mark.asyncio
    async def test_invalid_command(self, consistency_service):
        with pytest.raises(InvalidCacheCommand) as exc_info:
            await consistency_service.invalidate(make_command(tenant_id=" ", keys=[], delay_ms=-1))

        fields = [issue["field"] for issue in exc_info.value.issues]
        assert fields == ["tenant_id", "keys", "delay_ms"]
        assert consistency_service.pending_count == 0

    @pytest.mark.asyncio
    async def test_unknown_domain(self, consistency_service, memory_client):
        await memory_client.set("orders:1", "v")

        with pytest.raises(NamespacePolicyNotFound):
            await consistency_service.invalidate(make_command(domain="orders", keys=["orders:1"]))

        assert await memory_client.get("orders:1") == "v"

    @pytest.mark.asyncio
    async def test_unknown_client(self, consistency_service):
        with pytest.raises(MissingClientConfiguration):
            await consistency_service.invalidate(make_command(client_key="reporting"))

    @pytest.mark.asyncio
    async def test_contention_deletes_nothing(
        self, consistency_service, redlock, memory_client, notification_channel
    ):
        await memory_client.set("tenant-config:t1:config", "v")
        await redlock.acquire(["lock:invalidate:tenant-config:t1:config"], 5_000)

        with pytest.raises(LockAcquisitionTimeout):
            await consistency_service.invalidate(make_command())

        assert await memory_client.get("tenant-config:t1:config") == "v"
        assert consistency_service.pending_count == 0
        assert len(notification_channel.messages(LOCK_CONTENTION_TOPIC)) == 1
        assert notification_channel.messages(INVALIDATION_TOPIC) == []

    @pytest.mark.asyncio
    async def test_first_delete_failure(self, registry, lock_service, notification_service, lock_node):
        client = RecordingClient(lock_node, fail_on_call=1)
        service = CacheConsistencyService(
            registry, CacheClientProvider({"default": client}), lock_service, notification_service
        )

        with pytest.raises(CacheOperationError) as exc_info:
            await service.invalidate(make_command())

        assert exc_info.value.details["phase"] == "first"
        assert service.pending_count == 0
        assert not lock_node.is_locked("lock:invalidate:tenant-config:t1:config")

    @pytest.mark.asyncio
    async def test_second_delete_failure_is_logged(
        self, registry, lock_service, notification_service, lock_node, caplog
    ):
        client = RecordingClient(lock_node, fail_on_call=2)
        service = CacheConsistencyService(
            registry, CacheClientProvider({"default": client}), lock_service, notification_service
        )

        await service.invalidate(make_command(delay_ms=0, request_id="req-3"))
        await service.wait_for_pending()

        assert "Second delete for invalidation req-3 failed" in caplog.text

    @pytest.mark.asyncio
    async def test_client_namespace_applied_to_keys(self, registry, lock_service, memory_client):
        provider = CacheClientProvider(
            {"default": memory_client},
            client_settings=[RedisClientSettings(client_key="default", namespace="svc")],
        )
        service = CacheConsistencyService(registry, provider, lock_service)
        await memory_client.set("svc:tenant-config:t1:config", "v")

        receipt = await service.invalidate(make_command(delay_ms=0))
        await service.wait_for_pending()

        assert receipt.keys == ("svc:tenant-config:t1:config",)
        assert await memory_client.get("svc:tenant-config:t1:config") is None

    @pytest.mark.asyncio
    async def test_shutdown_drains_pending(self, consistency_service, memory_client):
        await consistency_service.invalidate(make_command(delay_ms=30))
        await memory_client.set("tenant-config:t1:config", "stale")

        await consistency_service.shutdown()

        assert consistency_service.pending_count == 0
        assert await memory_client.get("tenant-config:t1:config") is None

    @pytest.mark.asyncio
    async def test_single_string_keys_rejected(self, consistency_service, memory_client):
        await memory_client.set("k", "v")
        await memory_client.set("1", "v")

        with pytest.raises(InvalidCacheCommand) as exc_info:
            await consistency_service.invalidate(make_command(keys="k1"))

        assert [issue["field"] for issue in exc_info.value.issues] == ["keys"]
        assert await memory_client.get("k") == "v"
        assert await memory_client.get("1") == "v"


class SlowDeleteClient(MemoryCacheClient):
    """Memory client that holds each delete open briefly."""

    def __init__(self):
        super().__init__()
        self.events = []

    async def delete(self, *names):
        self.events.append(("enter", names))
        await asyncio.sleep(0.02)
        self.events.append(("exit", names))
        return await super().delete(*names)


class TestConcurrentInvalidations:
    """Test how the shared lock orders concurrent invalidations."""

    @pytest.fixture
    def slow_client(self):
        return SlowDeleteClient()

    @pytest.fixture
    def service(self, registry, lock_service, notification_service, slow_client):
        return CacheConsistencyService(
            registry, CacheClientProvider({"default": slow_client}), lock_service, notification_service
        )

    @pytest.mark.asyncio
    async def test_overlapping_key_sets_are_serialized(self, service, slow_client):
        await asyncio.gather(
            service.invalidate(make_command(keys=["a", "shared"], delay_ms=200)),
            service.invalidate(make_command(keys=["shared", "b"], delay_ms=200)),
        )

        # Only first-phase deletes have run so far
        events = list(slow_client.events)
        await service.wait_for_pending()

        assert [kind for kind, _ in events] == ["enter", "exit", "enter", "exit"]
        assert events[0][1] == events[1][1]
        assert events[2][1] == events[3][1]
        assert {events[0][1], events[2][1]} == {("a", "shared"), ("shared", "b")}

    @pytest.mark.asyncio
    async def test_disjoint_key_sets_run_in_parallel(self, service, slow_client):
        await asyncio.gather(
            service.invalidate(make_command(keys=["a"], delay_ms=200)),
            service.invalidate(make_command(keys=["b"], delay_ms=200)),
        )

        events = list(slow_client.events)
        await service.wait_for_pending()

        assert [kind for kind, _ in events] == ["enter", "enter", "exit", "exit"]
        assert {events[0][1], events[1][1]} == {("a",), ("b",)}
