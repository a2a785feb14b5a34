"""Duration parsing.

Accepts the two notations commonly found in property files:

- simple: ``30s``, ``500ms``, ``-2h``, ``10ns`` (units ns, us, ms, s, m, h, d)
- ISO-8601: ``PT1M``, ``PT0.5S``, ``P1DT2H``, ``-PT5S``

A bare number such as ``"500"`` is read in a caller supplied default unit.
"""

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation

UNIT_MICROSECONDS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
    "d": Decimal(86_400_000_000),
}

_SIMPLE_RE = re.compile(r"^([+-]?\d+)([a-zA-Z]*)$")
_ISO_RE = re.compile(
    r"^([+-]?)P"
    r"(?:(\d+)D)?"
    r"(?:T"
    r"(?:(\d+)H)?"
    r"(?:(\d+)M)?"
    r"(?:(\d+(?:\.\d+)?)S)?"
    r")?$",
    re.IGNORECASE,
)


class DurationFormatError(ValueError):
    """The text is not a recognised duration."""


def _from_microseconds(micros: Decimal) -> timedelta:
    # timedelta has microsecond resolution; drop anything finer
    try:
        return timedelta(microseconds=int(micros))
    except OverflowError as e:
        raise DurationFormatError("duration out of range") from e


def parse_iso_duration(text: str) -> timedelta:
    """Parse an ISO-8601 day/time duration (no years or months)."""
    match = _ISO_RE.match(text)
    if not match:
        raise DurationFormatError(f"Invalid ISO-8601 duration: {text!r}")

    sign, days, hours, minutes, seconds = match.groups()
    if days is None and hours is None and minutes is None and seconds is None:
        raise DurationFormatError(f"ISO-8601 duration has no components: {text!r}")
    if text.upper().endswith("T"):
        raise DurationFormatError(f"ISO-8601 duration has an empty time part: {text!r}")

    micros = (
        Decimal(days or 0) * UNIT_MICROSECONDS["d"]
        + Decimal(hours or 0) * UNIT_MICROSECONDS["h"]
        + Decimal(minutes or 0) * UNIT_MICROSECONDS["m"]
        + Decimal(seconds or 0) * UNIT_MICROSECONDS["s"]
    )
    if sign == "-":
        micros = -micros
    return _from_microseconds(micros)


def parse_duration(text: str, default_unit: str = "ms") -> timedelta:
    """Parse ``text`` into a timedelta.

    Args:
        text: Raw duration text
        default_unit: Unit applied when ``text`` is a bare integer

    Raises:
        DurationFormatError: If the text is not a valid duration
    """
    if default_unit not in UNIT_MICROSECONDS:
        raise ValueError(f"Unknown duration unit: {default_unit}")

    value = text.strip()
    if not value:
        raise DurationFormatError("Empty duration")

    body = value.lstrip("+-")
    if body[:1] in ("P", "p"):
        return parse_iso_duration(value)

    match = _SIMPLE_RE.match(value)
    if not match:
        raise DurationFormatError(f"Invalid duration: {text!r}")

    amount, unit = match.groups()
    unit = unit.lower() or default_unit
    if unit not in UNIT_MICROSECONDS:
        raise DurationFormatError(f"Unknown duration unit {unit!r} in {text!r}")

    try:
        micros = Decimal(amount) * UNIT_MICROSECONDS[unit]
    except InvalidOperation as e:
        raise DurationFormatError(f"Invalid duration: {text!r}") from e
    return _from_microseconds(micros)


def format_duration(value: timedelta) -> str:
    """Render a timedelta in the shortest simple form that round-trips."""
    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"
    for unit in ("d", "h", "m", "s", "ms"):
        size = int(UNIT_MICROSECONDS[unit])
        if micros % size == 0:
            return f"{micros // size}{unit}"
    return f"{micros}us"
