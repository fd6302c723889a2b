"""Cache command validators."""

from .validation_result import ValidationIssue, ValidationResult
from .command_validator import validate_invalidation_command, validate_prefetch_request

__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "validate_invalidation_command",
    "validate_prefetch_request",
]
