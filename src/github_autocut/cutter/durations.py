"""Compact duration strings ("90m", "1h30m", "1.5h") and their human rendering."""

from __future__ import annotations

import math
import re
from datetime import timedelta

from github_autocut.cutter.errors import InvalidInputError

_UNIT_MICROSECONDS: dict[str, int] = {
    "us": 1,
    "µs": 1,
    "ms": 1_000,
    "s": 1_000_000,
    "m": 60 * 1_000_000,
    "h": 60 * 60 * 1_000_000,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(us|µs|ms|s|m|h)")


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as ``"1h30m"``, ``"45s"`` or ``"1.5h"``.

    A bare ``"0"`` is accepted. Negative durations are rejected.

    Raises:
        InvalidInputError: if the string is empty, negative, or malformed.
    """

    text = value.strip()
    if not text:
        raise InvalidInputError("duration is required")
    if text.startswith("-"):
        raise InvalidInputError(f"duration must not be negative: {value!r}")
    if text.startswith("+"):
        text = text[1:]
    if text == "0":
        return timedelta(0)

    pos = 0
    micros = 0.0
    while pos < len(text):
        component = _COMPONENT.match(text, pos)
        if component is None:
            raise InvalidInputError(f"invalid duration: {value!r}")
        number, unit = component.groups()
        micros += float(number) * _UNIT_MICROSECONDS[unit]
        pos = component.end()

    if pos == 0 or not math.isfinite(micros):
        raise InvalidInputError(f"invalid duration: {value!r}")
    try:
        return timedelta(microseconds=round(micros))
    except OverflowError as e:
        raise InvalidInputError(f"invalid duration: {value!r}") from e


def _trim_fraction(whole: int, fraction: int, width: int) -> str:
    if not fraction:
        return str(whole)
    return f"{whole}.{fraction:0{width}d}".rstrip("0")


def format_duration(value: timedelta) -> str:
    """Render a duration as e.g. ``"1h0m0s"``, ``"2m5s"``, ``"1.5s"`` or ``"250ms"``."""

    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        millis, rest = divmod(micros, 1_000)
        return f"{sign}{_trim_fraction(millis, rest, 3)}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds, fraction = divmod(rest, 1_000_000)
    secs = _trim_fraction(seconds, fraction, 6)

    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"
