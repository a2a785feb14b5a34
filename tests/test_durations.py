"""Tests for duration parsing and formatting."""

from datetime import timedelta

import pytest

from configbind.durations import (
    DurationFormatError,
    format_duration,
    parse_duration,
    parse_iso_duration,
)


class TestSimpleDurations:
    """Tests for the number-plus-unit notation."""

    @pytest.mark.parametrize("text,expected", [
        ("30s", timedelta(seconds=30)),
        ("500ms", timedelta(milliseconds=500)),
        ("2h", timedelta(hours=2)),
        ("1m", timedelta(minutes=1)),
        ("1d", timedelta(days=1)),
        ("250us", timedelta(microseconds=250)),
        ("30S", timedelta(seconds=30)),
        ("-2s", timedelta(seconds=-2)),
        (" 5s ", timedelta(seconds=5)),
    ])
    def test_units(self, text, expected):
        """Each supported unit is recognised."""
        assert parse_duration(text) == expected

    def test_bare_number_uses_milliseconds(self):
        """A bare number defaults to milliseconds."""
        assert parse_duration("500") == timedelta(milliseconds=500)

    def test_bare_number_custom_default_unit(self):
        """The default unit can be changed."""
        assert parse_duration("5", default_unit="s") == timedelta(seconds=5)

    def test_nanoseconds_truncate_to_microseconds(self):
        """Sub-microsecond precision is dropped."""
        assert parse_duration("1500ns") == timedelta(microseconds=1)
        assert parse_duration("10ns") == timedelta(0)

    @pytest.mark.parametrize("text", ["", "   ", "abc", "5x", "1.5s", "5 s", "s"])
    def test_malformed(self, text):
        """Malformed text raises DurationFormatError."""
        with pytest.raises(DurationFormatError):
            parse_duration(text)

    def test_unknown_default_unit(self):
        """An unknown default unit is a programming error."""
        with pytest.raises(ValueError, match="Unknown duration unit"):
            parse_duration("5", default_unit="weeks")


class TestIsoDurations:
    """Tests for ISO-8601 durations."""

    @pytest.mark.parametrize("text,expected", [
        ("PT1M", timedelta(minutes=1)),
        ("pt1m", timedelta(minutes=1)),
        ("PT30S", timedelta(seconds=30)),
        ("PT0.5S", timedelta(milliseconds=500)),
        ("P1DT2H", timedelta(days=1, hours=2)),
        ("P2D", timedelta(days=2)),
        ("PT1H30M", timedelta(hours=1, minutes=30)),
        ("-PT5S", timedelta(seconds=-5)),
    ])
    def test_valid(self, text, expected):
        """Day and time components are summed."""
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["P", "PT", "P1DT", "P1Y", "PT1X", "PTS"])
    def test_invalid(self, text):
        """Empty or unsupported components are rejected."""
        with pytest.raises(DurationFormatError):
            parse_iso_duration(text)


class TestFormatDuration:
    """Tests for format_duration()."""

    @pytest.mark.parametrize("value,expected", [
        (timedelta(0), "0s"),
        (timedelta(seconds=5), "5s"),
        (timedelta(seconds=60), "1m"),
        (timedelta(milliseconds=3500), "3500ms"),
        (timedelta(hours=3), "3h"),
        (timedelta(days=2), "2d"),
        (timedelta(microseconds=7), "7us"),
        (timedelta(seconds=-5), "-5s"),
    ])
    def test_shortest_form(self, value, expected):
        """The largest unit that divides evenly is used."""
        assert format_duration(value) == expected
