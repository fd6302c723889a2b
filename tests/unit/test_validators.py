"""Tests for cache command validation."""

import pytest

from neo_cache.application.validators import (
    ValidationResult,
    validate_invalidation_command,
    validate_prefetch_request,
)
from neo_cache.core.exceptions import InvalidCacheCommand
from neo_cache.core.value_objects.invalidation_command import InvalidationCommand


class TestValidateInvalidationCommand:
    """Test invalidation command rules."""

    def test_valid_command(self):
        command = InvalidationCommand(domain="tenant-config", tenant_id="t1", keys=["k"], reason="updated")

        assert validate_invalidation_command(command).is_valid

    def test_collects_every_issue(self):
        command = InvalidationCommand(
            domain="",
            tenant_id="t1",
            keys=["k", "  "],
            reason="",
            delay_ms=-5,
            lock_duration_ms=0,
        )

        result = validate_invalidation_command(command)

        assert [issue.field for issue in result.issues] == [
            "domain",
            "reason",
            "keys[1]",
            "delay_ms",
            "lock_duration_ms",
        ]

    def test_zero_delay_is_allowed(self):
        command = InvalidationCommand(domain="d", tenant_id="t", keys=["k"], reason="r", delay_ms=0)

        assert validate_invalidation_command(command).is_valid

    def test_keys_are_stored_as_tuple(self):
        command = InvalidationCommand(domain="d", tenant_id="t", keys=["a", "b"], reason="r")

        assert command.keys == ("a", "b")

    @pytest.mark.parametrize("keys", ["k1", b"k1"])
    def test_single_string_keys_rejected(self, keys):
        command = InvalidationCommand(domain="d", tenant_id="t", keys=keys, reason="r")

        result = validate_invalidation_command(command)

        assert command.keys == keys
        assert [issue.field for issue in result.issues] == ["keys"]

    def test_prefetch_single_string_keys_rejected(self):
        result = validate_prefetch_request("tenant-config", "t1", "k1")

        assert [issue.field for issue in result.issues] == ["keys"]


class TestValidatePrefetchRequest:
    """Test prefetch request rules."""

    def test_missing_keys(self):
        result = validate_prefetch_request("tenant-config", "t1", None)

        assert [issue.field for issue in result.issues] == ["keys"]

    def test_raise_if_invalid(self):
        with pytest.raises(InvalidCacheCommand) as exc_info:
            validate_prefetch_request(" ", "", ["k"]).raise_if_invalid()

        assert exc_info.value.details["issues"] == [
            {"field": "domain", "message": "domain is required"},
            {"field": "tenant_id", "message": "tenant_id is required"},
        ]

    def test_valid_result_does_not_raise(self):
        ValidationResult().raise_if_invalid()
