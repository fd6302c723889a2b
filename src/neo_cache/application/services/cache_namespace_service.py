"""Cache namespace service.

ONLY policy queries - read-side view of the namespace registry.

Following maximum separation architecture - one file = one purpose.
"""

import logging
from typing import Any, Dict, List

from .cache_namespace_registry import CacheNamespaceRegistry

logger = logging.getLogger(__name__)


class CacheNamespaceService:
    """Lists namespace policies for API consumers."""

    def __init__(self, registry: CacheNamespaceRegistry):
        self.registry = registry

    def list_policies(self) -> List[Dict[str, Any]]:
        """Return every policy as a dictionary view, sorted by domain."""
        policies = self.registry.list()
        if not policies:
            logger.warning("No cache namespace policies configured", extra={"event": "cache.namespace.empty"})
        return [policy.to_dict() for policy in policies]
