"""Pytest fixtures for configbind tests."""

import pytest

from configbind import ConfigBinder, MappingSource


@pytest.fixture
def binder():
    """Provide a binder with default options."""
    return ConfigBinder()


@pytest.fixture
def valid_values():
    """Flat, unprefixed settings that satisfy every data source constraint."""
    return {
        "url": "jdbc:db",
        "username": "u",
        "password": "p",
        "etc.max-connections": "50",
        "etc.timeout": "5s",
        "etc.options": "CACHE,ADMIN",
    }


@pytest.fixture
def valid_source(valid_values):
    """Provide a source built from valid_values."""
    return MappingSource(valid_values)


@pytest.fixture
def prefixed_source(valid_values):
    """Valid settings placed under the my.datasource prefix."""
    return MappingSource({f"my.datasource.{k}": v for k, v in valid_values.items()})


@pytest.fixture
def config_file(tmp_path):
    """Write a valid YAML config file and return its path."""
    path = tmp_path / "application.yaml"
    path.write_text(
        "my:\n"
        "  datasource:\n"
        "    url: local.db.com\n"
        "    username: local_user\n"
        "    password: local_pw\n"
        "    etc:\n"
        "      max-connections: 1\n"
        "      timeout: 3500ms\n"
        "      options: CACHE,ADMIN\n"
    )
    return path
