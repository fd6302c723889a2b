"""Notification channel protocol.

ONLY publication contract - transport for cache notifications.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class NotificationChannel(Protocol):
    """Notification channel protocol.

    Implementations must be durable enough for at-least-once delivery;
    publish may be retried so consumers deduplicate on ``event_id``.
    """

    async def publish(self, topic: str, payload: Dict[str, Any]) -> str:
        """Publish payload to topic and return the message id."""
        ...
