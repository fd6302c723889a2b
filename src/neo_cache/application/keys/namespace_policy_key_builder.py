"""Namespace policy key builder.

ONLY policy-driven keys - prefix, suffix and separator come from the
registered policy of one domain, looked up on every build so policy
reloads take effect immediately.

Following maximum separation architecture - one file = one purpose.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ...core.entities.namespace_policy import NamespacePolicy
from ...core.exceptions import NamespacePolicyNotFound

from .abstract_key_builder import AbstractCacheKeyBuilder

if TYPE_CHECKING:
    from ..services.cache_namespace_registry import CacheNamespaceRegistry


class NamespacePolicyKeyBuilder(AbstractCacheKeyBuilder):
    """Builds ``<key_prefix>[:<tenant_id>]:<parts...>[:<key_suffix>]`` keys."""

    def __init__(self, registry: "CacheNamespaceRegistry", domain: str):
        self.registry = registry
        self.domain = domain

    @property
    def policy(self) -> NamespacePolicy:
        policy = self.registry.get(self.domain)
        if policy is None:
            raise NamespacePolicyNotFound(self.domain)
        return policy

    def get_namespace(self, payload: Dict[str, Any]) -> str:
        return self.policy.key_prefix

    def get_key_parts(self, payload: Dict[str, Any]) -> List[Any]:
        parts: List[Any] = []
        if "tenant_id" in payload:
            parts.append(payload["tenant_id"])
        parts.extend(payload.get("parts") or ())
        return parts

    def get_suffix(self, payload: Dict[str, Any]) -> Optional[str]:
        return self.policy.key_suffix

    def get_separator(self) -> str:
        return self.policy.separator
