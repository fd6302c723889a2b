"""Namespace policy not found exception.

ONLY policy lookup errors - raised when a domain has no registered policy.

Following maximum separation architecture - one file = one purpose.
"""

from .base import MissingConfiguration


class NamespacePolicyNotFound(MissingConfiguration):
    """Raised when no namespace policy is registered for a domain."""

    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(
            message=f"No cache namespace policy registered for domain '{domain}'",
            error_code="CACHE_NAMESPACE_POLICY_NOT_FOUND",
            details={"domain": domain},
        )
