"""Origin data sources."""

from .in_memory_tenant_config import InMemoryTenantConfigurationDataSource

__all__ = ["InMemoryTenantConfigurationDataSource"]
