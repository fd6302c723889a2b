"""Redis client factory.

ONLY client construction - builds ``redis.asyncio.Redis`` instances from
client settings.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Dict, Iterable

from redis.asyncio import Redis

from ...config.settings import RedisClientSettings

logger = logging.getLogger(__name__)


def create_redis_client(settings: RedisClientSettings) -> Redis:
    """Create an async Redis client.

    Args:
        settings: Client connection settings

    Returns:
        Redis client with string responses
    """
    options = {
        "decode_responses": True,
        "socket_timeout": settings.command_timeout_ms / 1000 if settings.command_timeout_ms else None,
        "socket_connect_timeout": settings.connect_timeout_ms / 1000 if settings.connect_timeout_ms else None,
        "socket_keepalive": settings.keep_alive,
        "health_check_interval": 30,
    }
    if settings.connection_name:
        options["client_name"] = settings.connection_name
    if settings.username:
        options["username"] = settings.username
    if settings.password:
        options["password"] = settings.password.get_secret_value()

    if settings.url:
        logger.info(f"Creating Redis client '{settings.resolved_key}' from URL")
        return Redis.from_url(settings.url, db=settings.db, **options)

    logger.info(
        f"Creating Redis client '{settings.resolved_key}' "
        f"for {settings.host}:{settings.port}/{settings.db}"
    )
    return Redis(host=settings.host, port=settings.port, db=settings.db, **options)


def create_redis_clients(client_settings: Iterable[RedisClientSettings]) -> Dict[str, Redis]:
    """Create one Redis client per configured entry, keyed by client key."""
    clients: Dict[str, Redis] = {}
    for settings in client_settings:
        key = settings.resolved_key
        if key in clients:
            logger.warning(f"Duplicate Redis client key '{key}', later configuration wins")
        clients[key] = create_redis_client(settings)
    return clients
