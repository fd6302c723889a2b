"""Tests for cache notifications."""

import pytest
from unittest.mock import AsyncMock

from neo_cache.application.services.cache_notification_service import (
    CacheNotificationService,
    PublishRetryPolicy,
)
from neo_cache.config.constants import INVALIDATION_TOPIC, PREFETCH_TOPIC
from neo_cache.config.settings import NotificationSettings
from neo_cache.core.exceptions import CacheOperationError, InvalidCacheCommand
from neo_cache.infrastructure.notifications.memory_channel import MemoryNotificationChannel


def no_wait_policy(attempts=3):
    return PublishRetryPolicy(max_attempts=attempts, initial_delay_ms=0, jitter=False)


class TestPublishRetryPolicy:
    """Test retry delays."""

    def test_exponential_delay_is_capped(self):
        policy = PublishRetryPolicy(initial_delay_ms=100, max_delay_ms=300, jitter=False)

        assert [policy.calculate_delay(attempt) for attempt in range(0, 5)] == [0, 100, 200, 300, 300]

    def test_jitter_stays_within_ten_percent(self):
        policy = PublishRetryPolicy(initial_delay_ms=100, jitter=True)

        for _ in range(20):
            assert 90 <= policy.calculate_delay(1) <= 110

    def test_invalid_attempts(self):
        with pytest.raises(ValueError):
            PublishRetryPolicy(max_attempts=0)

    def test_from_settings(self):
        policy = PublishRetryPolicy.from_settings(NotificationSettings(publish_attempts=5, publish_retry_delay_ms=10))

        assert policy.max_attempts == 5
        assert policy.initial_delay_ms == 10


class TestCacheNotificationService:
    """Test publishing with retries."""

    @pytest.mark.asyncio
    async def test_publish_invalidation(self, notification_service, notification_channel):
        message_id = await notification_service.publish_invalidation(
            domain="tenant-config", tenant_id="t1", keys=["k1", "k2"], reason="updated", request_id="req-1"
        )

        assert message_id == "1-0"
        payload = notification_channel.messages(INVALIDATION_TOPIC)[0]
        assert payload["event_type"] == INVALIDATION_TOPIC
        assert payload["keys"] == ["k1", "k2"]
        assert payload["event_id"]

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(self):
        channel = AsyncMock()
        channel.publish.side_effect = [ConnectionError("blip"), "5-0"]
        service = CacheNotificationService(channel, no_wait_policy())

        message_id = await service.publish_invalidation("tenant-config", "t1", ["k"], "updated")

        assert message_id == "5-0"
        assert channel.publish.await_count == 2

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise(self):
        channel = AsyncMock()
        channel.publish.side_effect = ConnectionError("down")
        service = CacheNotificationService(channel, no_wait_policy(attempts=3))

        with pytest.raises(CacheOperationError) as exc_info:
            await service.publish_lock_contention("tenant-config", "t1", ["k"], ["lock:k"], attempts=4)

        assert exc_info.value.operation == "publish"
        assert exc_info.value.details["attempts"] == 3
        assert isinstance(exc_info.value.cause, ConnectionError)

    @pytest.mark.asyncio
    async def test_prefetch_publishes_one_message_per_key(self, notification_service, notification_channel):
        result = await notification_service.publish_prefetch_requested(
            domain="tenant-config", tenant_id="t1", keys=["a", "b"], bypass_lock=True
        )

        assert result.refreshed == 2
        assert not result.has_failures
        messages = notification_channel.messages(PREFETCH_TOPIC)
        assert [message["key"] for message in messages] == ["a", "b"]
        assert all(message["bypass_lock"] for message in messages)

    @pytest.mark.asyncio
    async def test_prefetch_reports_failed_keys(self):
        channel = AsyncMock()
        channel.publish.side_effect = ["1-0", ConnectionError("down"), ConnectionError("down")]
        service = CacheNotificationService(channel, no_wait_policy(attempts=2))

        result = await service.publish_prefetch_requested("tenant-config", "t1", ["a", "b"])

        assert result.refreshed == 1
        assert result.to_dict()["failures"] == [
            {"key": "b", "reason": f"Failed to publish notification to '{PREFETCH_TOPIC}'"}
        ]

    @pytest.mark.asyncio
    async def test_prefetch_validation(self, notification_service):
        with pytest.raises(InvalidCacheCommand):
            await notification_service.publish_prefetch_requested("tenant-config", "t1", [])


class TestMemoryNotificationChannel:
    """Test in-process fan-out."""

    @pytest.mark.asyncio
    async def test_subscribers_receive_messages(self):
        channel = MemoryNotificationChannel()
        received = []

        async def async_subscriber(topic, payload):
            received.append(("async", payload["n"]))

        channel.subscribe("t", lambda topic, payload: received.append(("sync", payload["n"])))
        unsubscribe = channel.subscribe("t", async_subscriber)

        await channel.publish("t", {"n": 1})
        unsubscribe()
        await channel.publish("t", {"n": 2})

        assert received == [("sync", 1), ("async", 1), ("sync", 2)]

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_fail_publish(self):
        channel = MemoryNotificationChannel()

        def broken(topic, payload):
            raise RuntimeError("consumer crashed")

        channel.subscribe("t", broken)

        assert await channel.publish("t", {}) == "1-0"

    @pytest.mark.asyncio
    async def test_history_is_bounded(self):
        channel = MemoryNotificationChannel(max_history=2)

        for n in range(5):
            message_id = await channel.publish("t", {"n": n})

        assert message_id == "5-0"
        assert [payload["n"] for payload in channel.messages("t")] == [3, 4]

    def test_history_length_must_be_positive(self):
        with pytest.raises(ValueError):
            MemoryNotificationChannel(max_history=0)
