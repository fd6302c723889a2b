"""Distributed lock backends."""

from .redlock import Redlock
from .redis_lock_node import RedisLockNode
from .memory_lock_node import MemoryLockNode

__all__ = ["Redlock", "RedisLockNode", "MemoryLockNode"]
