"""Cache clients."""

from .memory_cache_client import MemoryCacheClient
from .cache_client_provider import CacheClientProvider
from .redis_client_factory import create_redis_client, create_redis_clients

__all__ = [
    "MemoryCacheClient",
    "CacheClientProvider",
    "create_redis_client",
    "create_redis_clients",
]
