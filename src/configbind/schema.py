"""Declarative configuration schemas.

A schema is plain data: a list of field descriptors (and nested groups)
interpreted by :class:`configbind.binder.ConfigBinder`. Constraints are
small value objects that inspect an already coerced value.
"""

from dataclasses import dataclass, field, replace
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Optional, Union


class FieldType(Enum):
    """Semantic type a raw value is coerced to."""
    STRING = "string"
    INT = "int"
    DURATION = "duration"
    STRING_LIST = "string_list"


class _Missing:
    """Marker for fields that have no default (required fields)."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class Constraint:
    """Base class for field constraints.

    Subclasses set ``name`` and implement ``check`` returning an error
    message, or None if the value is acceptable.
    """
    name = "constraint"
    applies_to: tuple[FieldType, ...] = tuple(FieldType)

    def check(self, value: Any) -> Optional[str]:
        raise NotImplementedError


@dataclass(frozen=True)
class NotEmpty(Constraint):
    """String or list must have at least one element."""
    name = "not_empty"
    applies_to = (FieldType.STRING, FieldType.STRING_LIST)

    def check(self, value: Any) -> Optional[str]:
        if len(value) == 0:
            return "must not be empty"
        return None


@dataclass(frozen=True)
class Min(Constraint):
    """Inclusive lower bound for integers."""
    value: int
    name = "min"
    applies_to = (FieldType.INT,)

    def check(self, value: Any) -> Optional[str]:
        if value < self.value:
            return f"must be greater than or equal to {self.value}"
        return None


@dataclass(frozen=True)
class Max(Constraint):
    """Inclusive upper bound for integers."""
    value: int
    name = "max"
    applies_to = (FieldType.INT,)

    def check(self, value: Any) -> Optional[str]:
        if value > self.value:
            return f"must be less than or equal to {self.value}"
        return None


@dataclass(frozen=True)
class DurationMin(Constraint):
    """Inclusive lower bound for durations."""
    value: timedelta
    name = "duration_min"
    applies_to = (FieldType.DURATION,)

    def check(self, value: Any) -> Optional[str]:
        if value < self.value:
            return f"must be longer than or equal to {self.value}"
        return None


@dataclass(frozen=True)
class DurationMax(Constraint):
    """Inclusive upper bound for durations."""
    value: timedelta
    name = "duration_max"
    applies_to = (FieldType.DURATION,)

    def check(self, value: Any) -> Optional[str]:
        if value > self.value:
            return f"must be shorter than or equal to {self.value}"
        return None


def _attr_name(key: str) -> str:
    return key.replace("-", "_")


@dataclass(frozen=True)
class FieldSpec:
    """Describes one leaf setting.

    Attributes:
        key: Key relative to the enclosing group ("max-connections")
        type: Semantic type the raw value is coerced to
        default: Default literal, or MISSING for a required field
        constraints: Rules the coerced value must satisfy
        attr: Constructor argument name (derived from key when omitted)
    """
    key: str
    type: FieldType = FieldType.STRING
    default: Any = MISSING
    constraints: tuple[Constraint, ...] = ()
    attr: str = ""

    def __post_init__(self):
        if not self.key or "." in self.key:
            raise ValueError(f"Field key must be a non-empty single segment: {self.key!r}")
        if not self.attr:
            object.__setattr__(self, "attr", _attr_name(self.key))
        object.__setattr__(self, "constraints", tuple(self.constraints))

        for constraint in self.constraints:
            if self.type not in constraint.applies_to:
                raise ValueError(
                    f"Constraint {constraint.name} cannot apply to "
                    f"{self.type.value} field {self.key!r}"
                )
        lower = [c.value for c in self.constraints if isinstance(c, (Min, DurationMin))]
        upper = [c.value for c in self.constraints if isinstance(c, (Max, DurationMax))]
        if lower and upper and max(lower) > min(upper):
            raise ValueError(f"Field {self.key!r} has a lower bound above its upper bound")

    @property
    def required(self) -> bool:
        return self.default is MISSING


@dataclass(frozen=True)
class GroupSpec:
    """A nested group of settings bound into its own value object."""
    key: str
    schema: "ConfigSchema"
    attr: str = ""

    def __post_init__(self):
        if not self.key or "." in self.key:
            raise ValueError(f"Group key must be a non-empty single segment: {self.key!r}")
        if not self.attr:
            object.__setattr__(self, "attr", _attr_name(self.key))


Member = Union[FieldSpec, GroupSpec]


@dataclass(frozen=True)
class ConfigSchema:
    """Shape and rules of a configuration object.

    Attributes:
        name: Label used in logs and errors
        members: Fields and nested groups, in declaration order
        factory: Callable receiving the bound values as keyword arguments
    """
    name: str
    members: tuple[Member, ...]
    factory: Callable[..., Any] = field(default=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(self.members))
        seen: set[str] = set()
        seen_attrs: set[str] = set()
        for member in self.members:
            if member.key in seen:
                raise ValueError(f"Duplicate key {member.key!r} in schema {self.name}")
            if member.attr in seen_attrs:
                raise ValueError(f"Duplicate attribute {member.attr!r} in schema {self.name}")
            seen.add(member.key)
            seen_attrs.add(member.attr)

    @property
    def fields(self) -> list[FieldSpec]:
        return [m for m in self.members if isinstance(m, FieldSpec)]

    @property
    def groups(self) -> list[GroupSpec]:
        return [m for m in self.members if isinstance(m, GroupSpec)]

    def keys(self, prefix: str = "") -> list[str]:
        """All leaf keys, fully dotted."""
        result = []
        for member in self.members:
            full = f"{prefix}{member.key}"
            if isinstance(member, GroupSpec):
                result.extend(member.schema.keys(prefix=f"{full}."))
            else:
                result.append(full)
        return result

    def without_constraints(self) -> "ConfigSchema":
        """Copy of this schema with every constraint removed."""
        members: list[Member] = []
        for member in self.members:
            if isinstance(member, GroupSpec):
                members.append(replace(member, schema=member.schema.without_constraints()))
            else:
                members.append(replace(member, constraints=()))
        return replace(self, members=tuple(members))
