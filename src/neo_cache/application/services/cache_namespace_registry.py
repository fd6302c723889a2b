"""Cache namespace registry.

ONLY policy registry - holds the current namespace policy snapshot,
swaps it atomically on reload and notifies change listeners.

Following maximum separation architecture - one file = one purpose.
"""

import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from ...config.constants import DEFAULT_CACHE_KEY_SEPARATOR
from ...config.settings import CacheSettings, NamespacePolicyConfig
from ...core.entities.namespace_policy import NamespacePolicy

logger = logging.getLogger(__name__)

PolicyInput = Union[NamespacePolicy, NamespacePolicyConfig, Mapping[str, Any]]
PolicyChangeListener = Callable[[List[NamespacePolicy]], None]


class CacheNamespaceRegistry:
    """Namespace policy registry with hot reload support.

    Readers always see either the previous or the new complete policy set;
    the swap is a single reference assignment.
    """

    def __init__(self, settings: Optional[CacheSettings] = None):
        self._policies: Dict[str, NamespacePolicy] = {}
        self._listeners: List[PolicyChangeListener] = []
        self._lock = threading.Lock()

        if settings is not None:
            self.refresh_from_settings(settings)

    def list(self) -> List[NamespacePolicy]:
        """Return every policy sorted by domain."""
        policies = self._policies
        return [policies[domain] for domain in sorted(policies)]

    def get(self, domain: str) -> Optional[NamespacePolicy]:
        """Return the policy for a domain, or None."""
        return self._policies.get(domain)

    def refresh_from_settings(self, settings: CacheSettings) -> None:
        """Replace policies from a settings snapshot."""
        self.replace_policies(settings.namespace_policies or [])

    def on_policies_change(self, listener: PolicyChangeListener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Callable that removes the listener again
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def replace_policies(self, policies: Iterable[PolicyInput]) -> None:
        """Replace the whole policy set and notify listeners.

        Duplicate domains log a warning and the last one wins.
        """
        replacement: Dict[str, NamespacePolicy] = {}
        for policy in policies:
            normalized = self._normalize(policy)
            if normalized.domain in replacement:
                logger.warning(
                    f"Duplicate cache namespace domain '{normalized.domain}', later policy wins",
                    extra={"domain": normalized.domain},
                )
            replacement[normalized.domain] = normalized

        with self._lock:
            self._policies = replacement
            listeners = list(self._listeners)
            snapshot = [replacement[domain] for domain in sorted(replacement)]

        logger.debug(f"Cache namespace policies refreshed: {len(replacement)} policies")
        self._notify_listeners(listeners, snapshot)

    def _notify_listeners(self, listeners: List[PolicyChangeListener], snapshot: List[NamespacePolicy]) -> None:
        for listener in listeners:
            try:
                listener(list(snapshot))
            except Exception as e:
                logger.error(f"Cache namespace policy listener failed: {e}", exc_info=True)

    @staticmethod
    def _normalize(policy: PolicyInput) -> NamespacePolicy:
        # Entities go through the same pattern checks as configured policies
        if isinstance(policy, NamespacePolicy):
            policy = NamespacePolicyConfig.model_validate(policy.to_dict())
        elif not isinstance(policy, NamespacePolicyConfig):
            policy = NamespacePolicyConfig.model_validate(dict(policy))

        return NamespacePolicy(
            domain=policy.domain,
            key_prefix=policy.key_prefix,
            key_suffix=policy.key_suffix or None,
            separator=policy.separator or DEFAULT_CACHE_KEY_SEPARATOR,
            default_ttl_seconds=policy.default_ttl_seconds,
            eviction_policy=policy.eviction_policy,
            hit_threshold_alert=policy.hit_threshold_alert,
        )
