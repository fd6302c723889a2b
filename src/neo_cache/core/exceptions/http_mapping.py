"""HTTP status code mapping for exceptions.

Maps cache engine exceptions to HTTP status codes. Lookup walks the
exception's class hierarchy so subclasses inherit their parent's status.
"""

from typing import Dict, Type

from .base import NeoCacheError, CacheValidationError, MissingConfiguration
from .invalid_key_segment import InvalidKeySegment
from .invalid_cache_command import InvalidCacheCommand
from .missing_client_configuration import MissingClientConfiguration
from .namespace_policy_not_found import NamespacePolicyNotFound
from .lock_acquisition_timeout import LockAcquisitionTimeout
from .cache_operation_error import CacheOperationError


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    CacheValidationError: 400,
    InvalidKeySegment: 400,
    InvalidCacheCommand: 400,

    # 404 Not Found
    NamespacePolicyNotFound: 404,

    # 409 Conflict
    LockAcquisitionTimeout: 409,

    # 500 Internal Server Error
    CacheOperationError: 500,

    # 503 Service Unavailable
    MissingConfiguration: 503,
    MissingClientConfiguration: 503,

    # Default for NeoCacheError
    NeoCacheError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code, 500 for anything unmapped
    """
    for exception_class in type(exception).__mro__:
        if exception_class in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_class]
    return 500
