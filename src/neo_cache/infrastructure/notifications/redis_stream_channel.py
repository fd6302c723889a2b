"""Redis Streams notification channel.

Publishes cache notifications to Redis Streams so every consumer group
receives them at least once. Streams are named ``<prefix>:<topic>`` and
trimmed approximately to a maximum length.
"""

import json
import logging
from typing import Any, Dict

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class RedisStreamNotificationChannel:
    """Redis Streams-based notification channel."""

    def __init__(self, redis_client: Redis, stream_prefix: str = "neo-cache", max_len: int = 10_000):
        """Initialize Redis stream channel.

        Args:
            redis_client: Async Redis client
            stream_prefix: Prefix for every stream name
            max_len: Maximum stream length for memory management
        """
        self._redis = redis_client
        self._stream_prefix = stream_prefix
        self._max_len = max_len

    def stream_name(self, topic: str) -> str:
        return f"{self._stream_prefix}:{topic}"

    async def publish(self, topic: str, payload: Dict[str, Any]) -> str:
        """Append a notification to the topic stream.

        Returns:
            Stream message ID
        """
        stream = self.stream_name(topic)
        fields = {
            "event_type": topic,
            "event_id": str(payload.get("event_id", "")),
            "payload": json.dumps(payload, default=str),
        }
        message_id = await self._redis.xadd(
            stream,
            fields,
            maxlen=self._max_len,
            approximate=True,
        )
        logger.debug(f"Published notification to stream '{stream}' with message_id '{message_id}'")
        return str(message_id)
