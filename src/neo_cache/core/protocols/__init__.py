"""Cache protocols."""

from .cache_client import CacheClient
from .lock_node import LockNode
from .notification_channel import NotificationChannel
from .cache_serializer import CacheSerializer
from .tenant_configuration_data_source import TenantConfigurationDataSource

__all__ = [
    "CacheClient",
    "LockNode",
    "NotificationChannel",
    "CacheSerializer",
    "TenantConfigurationDataSource",
]
