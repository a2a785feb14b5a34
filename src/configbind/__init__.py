"""configbind - typed, validated configuration binding.

Maps a flat namespace of external settings (strings, integers, durations,
string lists) onto immutable, typed configuration objects with defaults,
nested groups and declarative constraints.

Usage:
    from configbind import ConfigBinder, MappingSource
    from configbind.datasource import DATASOURCE_SCHEMA

    result = ConfigBinder().bind(
        MappingSource({"url": "jdbc:db", "username": "u",
                       "password": "p", "etc.timeout": "5s"}),
        DATASOURCE_SCHEMA,
    )
    if result.ok:
        print(result.value.etc.max_connections)  # 10
"""

__version__ = "0.1.0"

from .binder import BindResult, ConfigBinder
from .errors import BindError, CoercionError, FailureKind, ValidationFailure
from .schema import (
    MISSING,
    ConfigSchema,
    Constraint,
    DurationMax,
    DurationMin,
    FieldSpec,
    FieldType,
    GroupSpec,
    Max,
    Min,
    NotEmpty,
)
from .sources import (
    ConfigSource,
    EnvironmentSource,
    MappingSource,
    PrefixedSource,
    YamlFileSource,
)

__all__ = [
    "BindResult",
    "ConfigBinder",
    "BindError",
    "CoercionError",
    "FailureKind",
    "ValidationFailure",
    "MISSING",
    "ConfigSchema",
    "Constraint",
    "DurationMax",
    "DurationMin",
    "FieldSpec",
    "FieldType",
    "GroupSpec",
    "Max",
    "Min",
    "NotEmpty",
    "ConfigSource",
    "EnvironmentSource",
    "MappingSource",
    "PrefixedSource",
    "YamlFileSource",
]
