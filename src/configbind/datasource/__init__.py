"""Data source configuration bound from external settings."""

from .binding import bind_by_key, bind_properties, bind_validated_properties
from .datasource import DataSource
from .properties import (
    DATASOURCE_SCHEMA,
    DEFAULT_MAX_CONNECTIONS,
    ETC_SCHEMA,
    PROPERTIES_PREFIX,
    DataSourceProperties,
    EtcProperties,
)

__all__ = [
    "DataSource",
    "DataSourceProperties",
    "EtcProperties",
    "DATASOURCE_SCHEMA",
    "ETC_SCHEMA",
    "DEFAULT_MAX_CONNECTIONS",
    "PROPERTIES_PREFIX",
    "bind_by_key",
    "bind_properties",
    "bind_validated_properties",
]
