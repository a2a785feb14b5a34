"""Schema-driven configuration binder.

Usage:
    binder = ConfigBinder()
    result = binder.bind(source, schema)
    if result.ok:
        config = result.value
    else:
        for failure in result.failures:
            print(failure)
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar, Union

from .durations import UNIT_MICROSECONDS, DurationFormatError, parse_duration
from .errors import BindError, CoercionError, FailureKind, ValidationFailure
from .schema import ConfigSchema, FieldSpec, FieldType, GroupSpec
from .sources import ConfigSource, RawValue, as_source

logger = logging.getLogger(__name__)

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class BindResult(Generic[T]):
    """Outcome of one bind attempt: a value or a list of failures, never both."""
    value: Optional[T] = None
    failures: tuple[ValidationFailure, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "failures", tuple(self.failures))
        if self.failures and self.value is not None:
            raise ValueError("BindResult cannot carry both a value and failures")

    @property
    def ok(self) -> bool:
        return not self.failures

    def unwrap(self) -> T:
        """Return the bound value or raise BindError with every failure."""
        if self.failures:
            raise BindError(list(self.failures))
        return self.value


class ConfigBinder:
    """Binds raw settings from a ConfigSource onto a typed object.

    The binder holds only its own options, so one instance can be shared
    between threads.

    Args:
        list_delimiter: Separator used to split single-string list values
        default_duration_unit: Unit for bare numeric durations ("500")
    """

    def __init__(self, list_delimiter: str = ",", default_duration_unit: str = "ms"):
        if not list_delimiter:
            raise ValueError("list_delimiter must not be empty")
        if default_duration_unit not in UNIT_MICROSECONDS:
            raise ValueError(f"Unknown duration unit: {default_duration_unit}")
        self.list_delimiter = list_delimiter
        self.default_duration_unit = default_duration_unit
        self._coercers: dict[FieldType, Callable[[RawValue], Any]] = {
            FieldType.STRING: self._coerce_string,
            FieldType.INT: self._coerce_int,
            FieldType.DURATION: self._coerce_duration,
            FieldType.STRING_LIST: self._coerce_string_list,
        }

    def bind(
        self,
        source: Union[ConfigSource, Mapping[str, Any]],
        schema: ConfigSchema,
    ) -> BindResult:
        """Bind ``schema`` from ``source``, collecting every failure."""
        source = as_source(source)
        failures: list[ValidationFailure] = []
        values = self._bind_members(source, schema, "", failures)

        if failures:
            logger.warning(
                f"Binding {schema.name} failed with {len(failures)} problem(s): "
                + "; ".join(str(f) for f in failures)
            )
            return BindResult(failures=failures)

        logger.debug(f"Bound {schema.name} ({len(schema.keys())} keys)")
        return BindResult(value=self._build(schema, values))

    def bind_or_raise(
        self,
        source: Union[ConfigSource, Mapping[str, Any]],
        schema: ConfigSchema,
    ) -> Any:
        """Bind and return the value; raise BindError if anything failed."""
        result = self.bind(source, schema)
        if not result.ok:
            raise BindError(list(result.failures), target=schema.name)
        return result.value

    def _bind_members(
        self,
        source: ConfigSource,
        schema: ConfigSchema,
        prefix: str,
        failures: list[ValidationFailure],
    ) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for member in schema.members:
            full_key = f"{prefix}{member.key}"
            if isinstance(member, GroupSpec):
                values[member.attr] = self._bind_members(
                    source, member.schema, f"{full_key}.", failures
                )
            else:
                values[member.attr] = self._bind_field(source, member, full_key, failures)
        return values

    def _bind_field(
        self,
        source: ConfigSource,
        spec: FieldSpec,
        full_key: str,
        failures: list[ValidationFailure],
    ) -> Any:
        raw = source.get(full_key)
        if raw is None:
            if spec.required:
                failures.append(ValidationFailure(
                    key=full_key,
                    kind=FailureKind.MISSING_REQUIRED_FIELD,
                    constraint="required",
                    message="required setting is missing",
                ))
                return None
            raw = spec.default

        try:
            value = self.coerce(raw, spec.type)
        except CoercionError as e:
            failures.append(ValidationFailure(
                key=full_key,
                kind=FailureKind.TYPE_COERCION_ERROR,
                constraint=e.constraint,
                value=raw,
                message=e.message,
            ))
            return None

        for constraint in spec.constraints:
            message = constraint.check(value)
            if message is not None:
                failures.append(ValidationFailure(
                    key=full_key,
                    kind=FailureKind.CONSTRAINT_VIOLATION,
                    constraint=constraint.name,
                    value=value,
                    message=message,
                ))
        return value

    def _build(self, schema: ConfigSchema, values: dict[str, Any]) -> Any:
        kwargs = dict(values)
        for group in schema.groups:
            kwargs[group.attr] = self._build(group.schema, values[group.attr])
        return schema.factory(**kwargs)

    def coerce(self, raw: Any, field_type: FieldType) -> Any:
        """Convert a raw value (or default literal) to ``field_type``."""
        return self._coercers[field_type](raw)

    def _coerce_string(self, raw: Any) -> str:
        if isinstance(raw, (list, tuple)):
            return self.list_delimiter.join(str(item) for item in raw)
        return str(raw)

    def _coerce_int(self, raw: Any) -> int:
        if isinstance(raw, bool):
            raise CoercionError("int", f"expected an integer, got {raw!r}")
        if isinstance(raw, int):
            return raw
        if not isinstance(raw, str):
            raise CoercionError("int", f"expected an integer, got {raw!r}")
        text = raw.strip()
        # int() would also accept "1_000" and non-ASCII digits
        if not _INT_RE.fullmatch(text):
            raise CoercionError("int", f"expected a base-10 integer, got {raw!r}")
        try:
            return int(text)
        except ValueError as e:
            # more digits than the interpreter will convert
            raise CoercionError("int", f"integer out of range: {len(text)} digits") from e

    def _coerce_duration(self, raw: Any) -> timedelta:
        if isinstance(raw, timedelta):
            return raw
        if not isinstance(raw, str):
            raise CoercionError("duration", f"expected a duration, got {raw!r}")
        try:
            return parse_duration(raw, default_unit=self.default_duration_unit)
        except DurationFormatError as e:
            raise CoercionError("duration", str(e)) from e

    def _coerce_string_list(self, raw: Any) -> tuple[str, ...]:
        if isinstance(raw, (list, tuple)):
            return tuple(str(item) for item in raw)
        if not isinstance(raw, str):
            raise CoercionError("string_list", f"expected a list of strings, got {raw!r}")
        items = (item.strip() for item in raw.split(self.list_delimiter))
        return tuple(item for item in items if item)
