"""API response models."""

from .invalidation_response import InvalidationAcceptedResponse
from .prefetch_response import PrefetchResponse, PrefetchFailureResponse
from .namespace_policy_response import NamespacePolicyResponse

__all__ = [
    "InvalidationAcceptedResponse",
    "PrefetchResponse",
    "PrefetchFailureResponse",
    "NamespacePolicyResponse",
]
