"""Cache command validator.

ONLY command validation - checks invalidation and prefetch requests
before any lock is taken or key touched.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, Optional, Sequence

from ...core.value_objects.invalidation_command import InvalidationCommand
from .validation_result import ValidationResult


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _validate_keys(result: ValidationResult, keys: Optional[Sequence[Any]]) -> None:
    if isinstance(keys, (str, bytes)):
        result.add("keys", "keys must be a list of keys, not a single string")
        return
    if not keys:
        result.add("keys", "at least one key is required")
        return
    for index, key in enumerate(keys):
        if _is_blank(key):
            result.add(f"keys[{index}]", "key must be a non-empty string")


def validate_invalidation_command(command: InvalidationCommand) -> ValidationResult:
    """Validate an invalidation command.

    Args:
        command: Command to check

    Returns:
        Validation result with every issue found
    """
    result = ValidationResult()

    if _is_blank(command.domain):
        result.add("domain", "domain is required")
    if _is_blank(command.tenant_id):
        result.add("tenant_id", "tenant_id is required")
    if _is_blank(command.reason):
        result.add("reason", "reason is required")

    _validate_keys(result, command.keys)

    if command.delay_ms is not None and command.delay_ms < 0:
        result.add("delay_ms", "delay_ms cannot be negative")
    if command.lock_duration_ms is not None and command.lock_duration_ms <= 0:
        result.add("lock_duration_ms", "lock_duration_ms must be positive")

    return result


def validate_prefetch_request(
    domain: str,
    tenant_id: str,
    keys: Optional[Sequence[str]],
) -> ValidationResult:
    """Validate a prefetch request."""
    result = ValidationResult()

    if _is_blank(domain):
        result.add("domain", "domain is required")
    if _is_blank(tenant_id):
        result.add("tenant_id", "tenant_id is required")

    _validate_keys(result, keys)
    return result
