"""Configuration sources.

The binder only needs :meth:`ConfigSource.get`. The concrete sources here
cover the usual places settings come from: an in-memory mapping, the
process environment, and a YAML file.
"""

import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

RawValue = Union[str, list[str]]


class ConfigSource(ABC):
    """Read-only lookup of raw setting values by dotted key."""

    @abstractmethod
    def get(self, key: str) -> Optional[RawValue]:
        """Return the raw value for ``key`` or None if absent."""
        pass

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


def _to_raw(value: Any) -> RawValue:
    if isinstance(value, (list, tuple)):
        return [_scalar_to_str(v) for v in value]
    return _scalar_to_str(value)


def _scalar_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


class MappingSource(ConfigSource):
    """Source backed by a flat ``{dotted.key: value}`` mapping.

    Non-string scalars are stringified so that the binder always sees text,
    whatever the mapping was built from.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: dict[str, RawValue] = {
            key: _to_raw(value) for key, value in (values or {}).items()
        }

    def get(self, key: str) -> Optional[RawValue]:
        value = self._values.get(key)
        if isinstance(value, list):
            return list(value)
        return value

    def keys(self) -> list[str]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"MappingSource(keys={sorted(self._values)})"


class PrefixedSource(ConfigSource):
    """View of another source with every key placed under ``prefix``.

    ``PrefixedSource(src, "my.datasource").get("url")`` reads
    ``my.datasource.url`` from ``src``.
    """

    def __init__(self, source: ConfigSource, prefix: str):
        self.source = source
        self.prefix = prefix.strip(".")

    def get(self, key: str) -> Optional[RawValue]:
        full = f"{self.prefix}.{key}" if self.prefix else key
        return self.source.get(full)


class EnvironmentSource(ConfigSource):
    """Source reading environment variables with relaxed names.

    ``my.datasource.etc.max-connections`` is looked up as
    ``MY_DATASOURCE_ETC_MAXCONNECTIONS`` and then
    ``MY_DATASOURCE_ETC_MAX_CONNECTIONS``. Indexed variables
    (``..._OPTIONS_0``, ``..._OPTIONS_1``) are collected into a list when
    the plain variable is not set.

    The environment is copied on construction.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = dict(os.environ if environ is None else environ)

    @staticmethod
    def candidate_names(key: str) -> list[str]:
        """Environment variable names tried for ``key``, in order."""
        parts = key.upper().split(".")
        dashless = "_".join(p.replace("-", "") for p in parts)
        underscored = "_".join(p.replace("-", "_") for p in parts)
        names = [dashless]
        if underscored != dashless:
            names.append(underscored)
        return names

    def get(self, key: str) -> Optional[RawValue]:
        names = self.candidate_names(key)
        for name in names:
            if name in self._environ:
                return self._environ[name]

        for name in names:
            indexed = self._indexed(name)
            if indexed:
                return indexed
        return None

    def _indexed(self, name: str) -> list[str]:
        pattern = re.compile(rf"^{re.escape(name)}_(\d+)$")
        items = []
        for env_name, value in self._environ.items():
            match = pattern.match(env_name)
            if match:
                items.append((int(match.group(1)), value))
        return [value for _, value in sorted(items)]


def flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, RawValue]:
    """Flatten nested mappings into dotted keys."""
    flat: dict[str, RawValue] = {}
    for key, value in data.items():
        full = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten(value, prefix=f"{full}."))
        else:
            flat[full] = _to_raw(value)
    return flat


class YamlFileSource(MappingSource):
    """Source loaded from a YAML document.

    Nested mappings become dotted keys, YAML sequences become string lists.
    A missing file yields an empty source.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        super().__init__(flatten(self._load(self.path)))

    @staticmethod
    def _load(path: Path) -> Mapping[str, Any]:
        if not path.exists():
            logger.info(f"Config file not found, using empty source: {path}")
            return {}

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, Mapping):
            raise ValueError(f"Config file {path} must contain a mapping at the top level")
        logger.debug(f"Loaded config file: {path}")
        return data

    @classmethod
    def from_string(cls, text: str) -> MappingSource:
        """Build a source from YAML text without touching the filesystem."""
        data = yaml.safe_load(text) or {}
        if not isinstance(data, Mapping):
            raise ValueError("YAML document must contain a mapping at the top level")
        return MappingSource(flatten(data))


def as_source(values: Union[ConfigSource, Mapping[str, Any]]) -> ConfigSource:
    """Wrap a plain mapping in a MappingSource; pass sources through."""
    if isinstance(values, ConfigSource):
        return values
    if isinstance(values, Mapping):
        return MappingSource(values)
    raise TypeError(f"Cannot use {type(values).__name__} as a config source")
