"""Lock node protocol.

ONLY single-node lock contract - one independent lock backend taking part
in a quorum lock.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Sequence
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class LockNode(Protocol):
    """Lock node protocol.

    Every operation covers all resources atomically: either every resource
    is set/extended/released with ``value`` or none is.
    """

    @property
    def name(self) -> str:
        """Node identifier for logs."""
        ...

    async def acquire(self, resources: Sequence[str], value: str, duration_ms: int) -> bool:
        """Set every resource to ``value`` if none exists yet."""
        ...

    async def extend(self, resources: Sequence[str], value: str, duration_ms: int) -> bool:
        """Reset the expiry of resources still holding ``value``."""
        ...

    async def release(self, resources: Sequence[str], value: str) -> bool:
        """Delete resources still holding ``value``."""
        ...
