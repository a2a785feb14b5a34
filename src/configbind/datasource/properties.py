"""Typed data source properties and their schema."""

from dataclasses import dataclass
from datetime import timedelta

from ..schema import (
    ConfigSchema,
    DurationMax,
    DurationMin,
    FieldSpec,
    FieldType,
    GroupSpec,
    Max,
    Min,
    NotEmpty,
)

PROPERTIES_PREFIX = "my.datasource"
DEFAULT_MAX_CONNECTIONS = 10


@dataclass(frozen=True)
class EtcProperties:
    """Connection pool tuning.

    Attributes:
        timeout: Connection timeout (1s-60s)
        max_connections: Pool size limit (1-999)
        options: Free-form driver options, in declaration order
    """
    timeout: timedelta
    max_connections: int = DEFAULT_MAX_CONNECTIONS
    options: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "options", tuple(self.options))


@dataclass(frozen=True)
class DataSourceProperties:
    """Complete data source configuration.

    Attributes:
        url: Connection URL
        username: Login user
        password: Login password
        etc: Pool tuning group
    """
    url: str
    username: str
    password: str
    etc: EtcProperties

    def __repr__(self) -> str:
        return (
            f"DataSourceProperties(url={self.url!r}, username={self.username!r}, "
            f"password='****', etc={self.etc!r})"
        )


ETC_SCHEMA = ConfigSchema(
    name="EtcProperties",
    members=(
        FieldSpec(
            "max-connections",
            FieldType.INT,
            default=DEFAULT_MAX_CONNECTIONS,
            constraints=(Min(1), Max(999)),
        ),
        FieldSpec(
            "timeout",
            FieldType.DURATION,
            constraints=(DurationMin(timedelta(seconds=1)), DurationMax(timedelta(seconds=60))),
        ),
        FieldSpec("options", FieldType.STRING_LIST, default=()),
    ),
    factory=EtcProperties,
)

DATASOURCE_SCHEMA = ConfigSchema(
    name="DataSourceProperties",
    members=(
        FieldSpec("url", constraints=(NotEmpty(),)),
        FieldSpec("username", constraints=(NotEmpty(),)),
        FieldSpec("password", constraints=(NotEmpty(),)),
        GroupSpec("etc", ETC_SCHEMA),
    ),
    factory=DataSourceProperties,
)
