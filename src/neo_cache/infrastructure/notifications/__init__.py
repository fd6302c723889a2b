"""Notification channels."""

from .redis_stream_channel import RedisStreamNotificationChannel
from .memory_channel import MemoryNotificationChannel

__all__ = ["RedisStreamNotificationChannel", "MemoryNotificationChannel"]
