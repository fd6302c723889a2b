"""Cache serializer protocol.

ONLY serialization contract - encodes values for the cache store.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class CacheSerializer(Protocol):
    """Cache serializer protocol."""

    def serialize(self, value: Any) -> str:
        """Serialize value to a string for cache storage."""
        ...

    def deserialize(self, data: str) -> Any:
        """Deserialize stored string back to a Python object."""
        ...

    def get_format_name(self) -> str:
        """Get serialization format name."""
        ...
