"""Tenant configuration data source protocol.

ONLY origin contract - where tenant configuration records come from.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Dict
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class TenantConfigurationDataSource(Protocol):
    """Origin of tenant configuration records."""

    async def fetch_tenant_configuration(self, tenant_id: str) -> Dict[str, Any]:
        """Return the tenant's configuration record."""
        ...

    async def save_tenant_configuration(self, tenant_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Apply changes and return the updated record."""
        ...
