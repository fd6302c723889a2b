"""Configuration loaders."""

from .namespace_policy_loader import NamespacePolicyFileLoader

__all__ = ["NamespacePolicyFileLoader"]
