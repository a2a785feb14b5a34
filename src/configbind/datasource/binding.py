"""Three ways of turning raw settings into a DataSource.

1. ``bind_by_key``: look up each key by hand with an inline default, the
   way a value-injection config class does. Fails on the first bad key.
2. ``bind_properties``: schema-driven constructor binding, no constraints.
3. ``bind_validated_properties``: schema-driven binding with constraints,
   reporting every problem at once.

All three read keys under ``my.datasource`` unless another prefix is given.
"""

import logging
from typing import Any, Optional

from ..binder import ConfigBinder
from ..errors import BindError, CoercionError, FailureKind, ValidationFailure
from ..schema import MISSING, FieldType
from ..sources import ConfigSource, PrefixedSource
from .datasource import DataSource
from .properties import DATASOURCE_SCHEMA, DEFAULT_MAX_CONNECTIONS, PROPERTIES_PREFIX, DataSourceProperties

logger = logging.getLogger(__name__)

_default_binder = ConfigBinder()


def _value(
    source: ConfigSource,
    key: str,
    field_type: FieldType,
    default: Any = MISSING,
    binder: Optional[ConfigBinder] = None,
) -> Any:
    binder = binder or _default_binder
    raw = source.get(key)
    if raw is None:
        if default is MISSING:
            raise BindError([ValidationFailure(
                key=key,
                kind=FailureKind.MISSING_REQUIRED_FIELD,
                constraint="required",
                message="required setting is missing",
            )])
        raw = default

    try:
        return binder.coerce(raw, field_type)
    except CoercionError as e:
        raise BindError([ValidationFailure(
            key=key,
            kind=FailureKind.TYPE_COERCION_ERROR,
            constraint=e.constraint,
            value=raw,
            message=e.message,
        )]) from e


def bind_by_key(
    source: ConfigSource,
    prefix: str = PROPERTIES_PREFIX,
    binder: Optional[ConfigBinder] = None,
) -> DataSource:
    """Build a DataSource by reading each key individually."""
    scoped = PrefixedSource(source, prefix)
    data_source = DataSource(
        url=_value(scoped, "url", FieldType.STRING, binder=binder),
        username=_value(scoped, "username", FieldType.STRING, binder=binder),
        password=_value(scoped, "password", FieldType.STRING, binder=binder),
        max_connections=_value(
            scoped, "etc.max-connections", FieldType.INT,
            default=DEFAULT_MAX_CONNECTIONS, binder=binder,
        ),
        timeout=_value(scoped, "etc.timeout", FieldType.DURATION, binder=binder),
        options=_value(scoped, "etc.options", FieldType.STRING_LIST, default=(), binder=binder),
    )
    logger.debug("Built DataSource from individual keys")
    return data_source


def bind_properties(
    source: ConfigSource,
    prefix: str = PROPERTIES_PREFIX,
    binder: Optional[ConfigBinder] = None,
) -> DataSourceProperties:
    """Bind DataSourceProperties without applying constraints."""
    binder = binder or _default_binder
    return binder.bind_or_raise(
        PrefixedSource(source, prefix), DATASOURCE_SCHEMA.without_constraints()
    )


def bind_validated_properties(
    source: ConfigSource,
    prefix: str = PROPERTIES_PREFIX,
    binder: Optional[ConfigBinder] = None,
) -> DataSourceProperties:
    """Bind DataSourceProperties and enforce every declared constraint."""
    binder = binder or _default_binder
    return binder.bind_or_raise(PrefixedSource(source, prefix), DATASOURCE_SCHEMA)
