"""Cache engine exceptions."""

from .base import (
    NeoCacheError,
    CacheValidationError,
    MissingConfiguration,
    create_error_response,
    get_http_status_code,
)
from .invalid_key_segment import InvalidKeySegment
from .invalid_cache_command import InvalidCacheCommand
from .missing_client_configuration import MissingClientConfiguration
from .namespace_policy_not_found import NamespacePolicyNotFound
from .lock_acquisition_timeout import LockAcquisitionTimeout
from .cache_operation_error import CacheOperationError
from .http_mapping import HTTP_STATUS_MAP

__all__ = [
    "NeoCacheError",
    "CacheValidationError",
    "MissingConfiguration",
    "create_error_response",
    "get_http_status_code",
    "InvalidKeySegment",
    "InvalidCacheCommand",
    "MissingClientConfiguration",
    "NamespacePolicyNotFound",
    "LockAcquisitionTimeout",
    "CacheOperationError",
    "HTTP_STATUS_MAP",
]
