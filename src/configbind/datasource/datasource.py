"""Data source component configured from bound properties."""

import logging
from datetime import timedelta
from typing import Iterable

from ..durations import format_duration
from .properties import DataSourceProperties

logger = logging.getLogger(__name__)


class DataSource:
    """Holds connection settings for a (simulated) database.

    Nothing is opened; the component only reports its settings on
    :meth:`init`, which the container calls once at startup.
    """

    def __init__(
        self,
        url: str,
        username: str,
        password: str,
        max_connections: int,
        timeout: timedelta,
        options: Iterable[str] = (),
    ):
        self.url = url
        self.username = username
        self.password = password
        self.max_connections = max_connections
        self.timeout = timeout
        self.options = tuple(options)
        self._initialized = False

    @classmethod
    def from_properties(cls, properties: DataSourceProperties) -> "DataSource":
        return cls(
            url=properties.url,
            username=properties.username,
            password=properties.password,
            max_connections=properties.etc.max_connections,
            timeout=properties.etc.timeout,
            options=properties.etc.options,
        )

    def init(self) -> None:
        """Log the effective settings."""
        logger.info(f"url: {self.url}")
        logger.info(f"username: {self.username}")
        logger.info("password: ****")
        logger.info(f"maxConnections: {self.max_connections}")
        logger.info(f"timeout: {format_duration(self.timeout)}")
        logger.info(f"options: {list(self.options)}")
        self._initialized = True

    @property
    def initialized(self) -> bool:
        return self._initialized

    def settings(self) -> dict:
        """Settings as a plain dict, password masked."""
        return {
            "url": self.url,
            "username": self.username,
            "password": "****",
            "max_connections": self.max_connections,
            "timeout": format_duration(self.timeout),
            "options": list(self.options),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataSource):
            return NotImplemented
        return (
            self.url == other.url
            and self.username == other.username
            and self.password == other.password
            and self.max_connections == other.max_connections
            and self.timeout == other.timeout
            and self.options == other.options
        )

    def __hash__(self) -> int:
        return hash((self.url, self.username, self.max_connections, self.timeout, self.options))

    def __repr__(self) -> str:
        return (
            f"DataSource(url={self.url!r}, username={self.username!r}, "
            f"max_connections={self.max_connections}, timeout={format_duration(self.timeout)})"
        )
