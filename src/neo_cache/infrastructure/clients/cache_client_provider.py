"""Cache client provider.

ONLY client resolution - maps an optional client key to a registered
cache client and its namespace prefix.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from ...config.constants import DEFAULT_CACHE_KEY_SEPARATOR
from ...config.settings import RedisClientSettings
from ...core.exceptions import CacheOperationError, MissingClientConfiguration
from ...core.protocols.cache_client import CacheClient

logger = logging.getLogger(__name__)

ResolutionStrategy = Callable[[Optional[str]], Optional[str]]


class CacheClientProvider:
    """Resolves cache clients by key.

    Resolution tries, in order: the explicit key, the configured default
    key, then the first registered client.
    """

    def __init__(
        self,
        clients: Mapping[str, CacheClient],
        client_settings: Optional[Sequence[RedisClientSettings]] = None,
        default_client_key: Optional[str] = None,
        separator: str = DEFAULT_CACHE_KEY_SEPARATOR,
    ):
        self._clients: Dict[str, CacheClient] = dict(clients)
        self._client_settings: List[RedisClientSettings] = list(client_settings or [])
        self.default_client_key = default_client_key
        self.separator = separator
        self._strategies: List[ResolutionStrategy] = [
            self._explicit_key,
            self._configured_default_key,
            self._first_registered_key,
        ]

    @property
    def client_keys(self) -> List[str]:
        return list(self._clients)

    def register_client(self, client_key: str, client: CacheClient) -> None:
        """Register or replace a client."""
        self._clients[client_key] = client

    def resolve_client_key(self, client_key: Optional[str] = None) -> str:
        """Resolve which client key a request targets.

        Raises:
            MissingClientConfiguration: If no strategy yields a key
        """
        for strategy in self._strategies:
            resolved = strategy(client_key)
            if resolved:
                return resolved
        raise MissingClientConfiguration(None, self.client_keys)

    def get_client(self, client_key: Optional[str] = None) -> CacheClient:
        """Get the cache client for a key.

        Raises:
            MissingClientConfiguration: If the resolved key is not registered
            CacheOperationError: On unexpected lookup failures
        """
        target_key = self.resolve_client_key(client_key)

        try:
            client = self._clients.get(target_key)
        except Exception as e:
            logger.error(f"Unexpected error resolving cache client '{target_key}': {e}")
            raise CacheOperationError(
                operation="get_client",
                message="Failed to resolve cache client",
                details={"client_key": target_key},
                cause=e,
            ) from e

        if client is None:
            logger.error(f"Cache client '{target_key}' is not configured")
            raise MissingClientConfiguration(target_key, self.client_keys)

        return client

    def get_namespace_prefix(self, client_key: Optional[str] = None) -> Optional[str]:
        """Return the namespace configured for the resolved client, if any."""
        target_key = self.resolve_client_key(client_key)
        for settings in self._client_settings:
            if settings.resolved_key == target_key:
                return settings.namespace
        return None

    def qualify_key(self, key: str, client_key: Optional[str] = None) -> str:
        """Prefix a logical key with the client namespace when one is set."""
        prefix = self.get_namespace_prefix(client_key)
        if not prefix:
            return key
        return f"{prefix}{self.separator}{key}"

    async def aclose(self) -> None:
        """Close every client that supports it."""
        for key, client in self._clients.items():
            close = getattr(client, "aclose", None)
            if close is None:
                continue
            try:
                await close()
            except Exception as e:
                logger.warning(f"Failed to close cache client '{key}': {e}")

    @staticmethod
    def _explicit_key(client_key: Optional[str]) -> Optional[str]:
        if client_key and client_key.strip():
            return client_key.strip()
        return None

    def _configured_default_key(self, client_key: Optional[str]) -> Optional[str]:
        return self.default_client_key or None

    def _first_registered_key(self, client_key: Optional[str]) -> Optional[str]:
        return next(iter(self._clients), None)
