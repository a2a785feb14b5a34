"""Startup composition for the data source demo."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .binder import ConfigBinder
from .datasource import DataSource, DataSourceProperties, bind_validated_properties
from .datasource.properties import PROPERTIES_PREFIX
from .sources import ConfigSource, EnvironmentSource, YamlFileSource

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CONFIGBIND_CONFIG"
DEFAULT_CONFIG_FILE = "application.yaml"


def default_config_path() -> Path:
    """Config file path from CONFIGBIND_CONFIG, else ./application.yaml."""
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)).expanduser()


def load_source(
    config_path: Optional[Union[str, Path]] = None,
    use_env: bool = False,
) -> ConfigSource:
    """Pick the settings source: the environment, or a YAML file."""
    if use_env:
        return EnvironmentSource()
    return YamlFileSource(config_path or default_config_path())


class Container:
    """Binds configuration once and hands it to the components that need it.

    Usage:
        with Container(YamlFileSource("application.yaml")) as container:
            container.data_source.settings()

    ``initialize`` raises BindError listing every configuration problem,
    so a bad config stops startup before any component is built.
    """

    def __init__(
        self,
        source: ConfigSource,
        prefix: str = PROPERTIES_PREFIX,
        binder: Optional[ConfigBinder] = None,
    ):
        self.source = source
        self.prefix = prefix
        self.binder = binder or ConfigBinder()
        self._properties: Optional[DataSourceProperties] = None
        self._data_source: Optional[DataSource] = None
        self._initialized = False

    def initialize(self) -> None:
        """Bind properties and create components. Idempotent."""
        if self._initialized:
            return

        logger.info(f"Binding configuration under prefix: {self.prefix}")
        self._properties = bind_validated_properties(
            self.source, prefix=self.prefix, binder=self.binder
        )

        self._data_source = DataSource.from_properties(self._properties)
        self._data_source.init()

        self._initialized = True
        logger.info("Container initialized successfully")

    def shutdown(self) -> None:
        """Drop component references."""
        if not self._initialized:
            return

        logger.info("Shutting down container")
        self._data_source = None
        self._properties = None
        self._initialized = False

    @property
    def properties(self) -> DataSourceProperties:
        """Get the bound properties."""
        if self._properties is None:
            raise RuntimeError("Container not initialized. Call initialize() first.")
        return self._properties

    @property
    def data_source(self) -> DataSource:
        """Get the data source component."""
        if self._data_source is None:
            raise RuntimeError("Container not initialized. Call initialize() first.")
        return self._data_source

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
