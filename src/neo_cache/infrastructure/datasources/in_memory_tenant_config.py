"""In-memory tenant configuration data source.

ONLY sample origin - creates a default record on first access and bumps
the version on every save.

Following maximum separation architecture - one file = one purpose.
"""

from datetime import datetime, timezone
from typing import Any, Dict

READ_ONLY_FIELDS = ("tenant_id", "version", "updated_at")


class InMemoryTenantConfigurationDataSource:
    """Tenant configuration records kept in process memory."""

    def __init__(self):
        self._store: Dict[str, Dict[str, Any]] = {}
        self.fetch_count = 0

    async def fetch_tenant_configuration(self, tenant_id: str) -> Dict[str, Any]:
        self.fetch_count += 1
        if tenant_id not in self._store:
            self._store[tenant_id] = {
                "tenant_id": tenant_id,
                "display_name": f"Tenant {tenant_id}",
                "updated_at": datetime.now(timezone.utc).isoformat(),
                "version": 1,
            }
        return dict(self._store[tenant_id])

    async def save_tenant_configuration(self, tenant_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        record = await self.fetch_tenant_configuration(tenant_id)
        record.update({key: value for key, value in changes.items() if key not in READ_ONLY_FIELDS})
        record["version"] += 1
        record["updated_at"] = datetime.now(timezone.utc).isoformat()
        self._store[tenant_id] = record
        return dict(record)
