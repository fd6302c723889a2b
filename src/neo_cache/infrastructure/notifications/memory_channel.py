"""In-memory notification channel.

ONLY in-process fan-out - delivers notifications to local subscribers and
keeps a bounded history of recent messages, trimmed like a capped stream.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import itertools
import logging
from collections import deque
from typing import Any, Awaitable, Callable, Deque, Dict, List, Tuple, Union

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, Dict[str, Any]], Union[None, Awaitable[None]]]

DEFAULT_HISTORY_LENGTH = 1_000


class MemoryNotificationChannel:
    """Notification channel for single-process deployments and tests."""

    def __init__(self, max_history: int = DEFAULT_HISTORY_LENGTH):
        if max_history < 1:
            raise ValueError("max_history must be at least 1")

        self._subscribers: Dict[str, List[Subscriber]] = {}
        self._sequence = itertools.count(1)
        self.published: Deque[Tuple[str, Dict[str, Any]]] = deque(maxlen=max_history)

    def subscribe(self, topic: str, subscriber: Subscriber) -> Callable[[], None]:
        """Subscribe to a topic; returns an unsubscribe callable."""
        self._subscribers.setdefault(topic, []).append(subscriber)

        def unsubscribe() -> None:
            subscribers = self._subscribers.get(topic, [])
            if subscriber in subscribers:
                subscribers.remove(subscriber)

        return unsubscribe

    def messages(self, topic: str) -> List[Dict[str, Any]]:
        """Recent payloads published to a topic, oldest first."""
        return [payload for published_topic, payload in self.published if published_topic == topic]

    async def publish(self, topic: str, payload: Dict[str, Any]) -> str:
        self.published.append((topic, payload))
        message_id = f"{next(self._sequence)}-0"

        for subscriber in list(self._subscribers.get(topic, [])):
            try:
                result = subscriber(topic, payload)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.error(f"Notification subscriber for '{topic}' failed: {e}")

        return message_id
