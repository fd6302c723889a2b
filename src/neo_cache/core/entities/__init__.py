"""Cache domain entities."""

from .namespace_policy import NamespacePolicy, EvictionPolicy

__all__ = ["NamespacePolicy", "EvictionPolicy"]
