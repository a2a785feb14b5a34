"""Binding failure types."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class FailureKind(Enum):
    """Why a field could not be bound."""
    MISSING_REQUIRED_FIELD = "missing_required_field"
    TYPE_COERCION_ERROR = "type_coercion_error"
    CONSTRAINT_VIOLATION = "constraint_violation"


@dataclass(frozen=True)
class ValidationFailure:
    """A single problem found while binding one field.

    Attributes:
        key: Full dotted key of the field (e.g. "etc.max-connections")
        kind: Failure category
        constraint: Name of the violated rule ("required", "int", "min", ...)
        value: The offending raw or coerced value (None when missing)
        message: Human readable description
    """
    key: str
    kind: FailureKind
    constraint: str
    value: Any = None
    message: str = ""

    def __str__(self) -> str:
        return f"{self.key}: {self.message or self.constraint}"


class BindError(ValueError):
    """Raised when a caller insists on a bound object but binding failed."""

    def __init__(self, failures: list[ValidationFailure], target: Optional[str] = None):
        self.failures = list(failures)
        self.target = target
        header = f"Failed to bind {target}" if target else "Failed to bind configuration"
        lines = [f"{header} ({len(self.failures)} problem(s)):"]
        lines.extend(f"  - {failure}" for failure in self.failures)
        super().__init__("\n".join(lines))


class CoercionError(ValueError):
    """A raw value cannot be converted to the requested type."""

    def __init__(self, constraint: str, message: str):
        super().__init__(message)
        self.constraint = constraint
        self.message = message
