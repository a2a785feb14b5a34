"""Tests for the data source component and the three binding styles."""

import logging
from datetime import timedelta

import pytest

from configbind import BindError, FailureKind, MappingSource
from configbind.datasource import (
    DataSource,
    DataSourceProperties,
    EtcProperties,
    bind_by_key,
    bind_properties,
    bind_validated_properties,
)


class TestDataSourceProperties:
    """Tests for the properties value objects."""

    def test_etc_defaults(self):
        """The pool group defaults to ten connections and no options."""
        etc = EtcProperties(timeout=timedelta(seconds=5))

        assert etc.max_connections == 10
        assert etc.options == ()

    def test_timeout_and_etc_required(self):
        """No default timeout or pool group exists outside the 1s..60s range."""
        with pytest.raises(TypeError):
            EtcProperties()
        with pytest.raises(TypeError):
            DataSourceProperties(url="jdbc:db", username="u", password="p")

    def test_options_frozen_to_tuple(self):
        """A list of options is stored as a tuple."""
        etc = EtcProperties(timeout=timedelta(seconds=5), options=["a", "b"])
        assert etc.options == ("a", "b")

    def test_repr_masks_password(self):
        """The password never appears in repr()."""
        props = DataSourceProperties(
            url="jdbc:db",
            username="u",
            password="s3cret",
            etc=EtcProperties(timeout=timedelta(seconds=5)),
        )

        assert "s3cret" not in repr(props)
        assert "****" in repr(props)


class TestDataSource:
    """Tests for the DataSource component."""

    @pytest.fixture
    def data_source(self):
        return DataSource(
            url="jdbc:db",
            username="u",
            password="s3cret",
            max_connections=5,
            timeout=timedelta(seconds=5),
            options=["CACHE"],
        )

    def test_init_logs_settings(self, data_source, caplog):
        """init() logs every setting with the password masked."""
        with caplog.at_level(logging.INFO, logger="configbind.datasource.datasource"):
            data_source.init()

        assert data_source.initialized
        assert "url: jdbc:db" in caplog.text
        assert "maxConnections: 5" in caplog.text
        assert "timeout: 5s" in caplog.text
        assert "options: ['CACHE']" in caplog.text
        assert "s3cret" not in caplog.text

    def test_settings(self, data_source):
        """settings() is a JSON friendly dict."""
        assert data_source.settings() == {
            "url": "jdbc:db",
            "username": "u",
            "password": "****",
            "max_connections": 5,
            "timeout": "5s",
            "options": ["CACHE"],
        }

    def test_from_properties(self):
        """Properties map onto constructor arguments."""
        props = DataSourceProperties(
            url="jdbc:db",
            username="u",
            password="p",
            etc=EtcProperties(max_connections=3, timeout=timedelta(seconds=2), options=("x",)),
        )

        data_source = DataSource.from_properties(props)

        assert data_source.max_connections == 3
        assert data_source.timeout == timedelta(seconds=2)
        assert data_source.options == ("x",)
        assert not data_source.initialized


class TestBindingStyles:
    """The three ways of building a DataSource agree on valid input."""

    def test_styles_agree(self, prefixed_source):
        """Per-key, constructor and validated binding give the same DataSource."""
        by_key = bind_by_key(prefixed_source)
        by_properties = DataSource.from_properties(bind_properties(prefixed_source))
        validated = DataSource.from_properties(bind_validated_properties(prefixed_source))

        assert by_key == by_properties == validated
        assert by_key.options == ("CACHE", "ADMIN")

    def test_by_key_default(self):
        """Per-key binding falls back to ten connections."""
        source = MappingSource({
            "my.datasource.url": "jdbc:db",
            "my.datasource.username": "u",
            "my.datasource.password": "p",
            "my.datasource.etc.timeout": "5s",
        })

        data_source = bind_by_key(source)

        assert data_source.max_connections == 10
        assert data_source.options == ()

    def test_by_key_fails_on_first_missing_key(self):
        """Per-key binding stops at the first missing key."""
        source = MappingSource({"my.datasource.url": "jdbc:db"})

        with pytest.raises(BindError) as exc_info:
            bind_by_key(source)

        assert len(exc_info.value.failures) == 1
        assert exc_info.value.failures[0].key == "username"
        assert exc_info.value.failures[0].kind == FailureKind.MISSING_REQUIRED_FIELD

    def test_by_key_bad_integer(self, prefixed_source):
        """Per-key binding reports coercion problems."""
        source = MappingSource({
            "my.datasource.url": "jdbc:db",
            "my.datasource.username": "u",
            "my.datasource.password": "p",
            "my.datasource.etc.max-connections": "many",
            "my.datasource.etc.timeout": "5s",
        })

        with pytest.raises(BindError) as exc_info:
            bind_by_key(source)

        assert exc_info.value.failures[0].kind == FailureKind.TYPE_COERCION_ERROR

    def test_unvalidated_styles_accept_out_of_range(self):
        """Only the validated style enforces constraints."""
        source = MappingSource({
            "my.datasource.url": "",
            "my.datasource.username": "u",
            "my.datasource.password": "p",
            "my.datasource.etc.max-connections": "0",
            "my.datasource.etc.timeout": "120s",
        })

        assert bind_by_key(source).max_connections == 0
        assert bind_properties(source).etc.timeout == timedelta(seconds=120)

        with pytest.raises(BindError) as exc_info:
            bind_validated_properties(source)

        assert [f.key for f in exc_info.value.failures] == [
            "url",
            "etc.max-connections",
            "etc.timeout",
        ]

    def test_custom_prefix(self):
        """A different prefix can be used."""
        source = MappingSource({
            "db.url": "jdbc:db",
            "db.username": "u",
            "db.password": "p",
            "db.etc.timeout": "PT10S",
        })

        props = bind_validated_properties(source, prefix="db")

        assert props.etc.timeout == timedelta(seconds=10)
