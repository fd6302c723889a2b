"""Validation result.

ONLY validation outcome - tagged result collecting every issue found on
a command instead of failing on the first one.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any

from ...core.exceptions import InvalidCacheCommand


@dataclass(frozen=True)
class ValidationIssue:
    """Single validation problem on a field."""

    field: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    """Result of command validation."""

    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.issues) == 0

    def add(self, field_name: str, message: str) -> None:
        """Record an issue."""
        self.issues.append(ValidationIssue(field=field_name, message=message))

    def raise_if_invalid(self) -> None:
        """Raise InvalidCacheCommand carrying every issue found."""
        if not self.is_valid:
            raise InvalidCacheCommand([issue.to_dict() for issue in self.issues])
