"""Duration argument type (``10s``, ``5 min``, ``2.5h``, ``1y``)."""

import re
from datetime import timedelta
from typing import Optional

from infrastructure.commands.types.base import ArgumentType

SECOND = 1000
MINUTE = SECOND * 60
HOUR = MINUTE * 60
DAY = HOUR * 24
WEEK = DAY * 7
YEAR = DAY * 365.25

_UNITS = (
    (("years", "year", "yrs", "yr", "y"), YEAR),
    (("weeks", "week", "w"), WEEK),
    (("days", "day", "d"), DAY),
    (("hours", "hour", "hrs", "hr", "h"), HOUR),
    (("minutes", "minute", "mins", "min", "m"), MINUTE),
    (("seconds", "second", "secs", "sec", "s"), SECOND),
    (("milliseconds", "millisecond", "msecs", "msec", "ms"), 1),
)
_MULTIPLIERS = {alias: factor for aliases, factor in _UNITS for alias in aliases}
_DURATION_PATTERN = re.compile(
    r"^(?P<amount>-?(?:\d+)?\.?\d+)\s*(?P<unit>"
    + "|".join(sorted(_MULTIPLIERS, key=len, reverse=True))
    + r")?$",
    re.IGNORECASE,
)
_SHORT_UNITS = ((YEAR, "y"), (WEEK, "w"), (DAY, "d"), (HOUR, "h"), (MINUTE, "m"), (SECOND, "s"))

INVALID_FORMAT = (
    "Please enter a valid duration format. "
    "Use the `help` command for more information."
)
TOO_LONG = "The max. usable duration is `1 year`. Please try again."


def parse_milliseconds(value: str) -> Optional[float]:
    """Parse ``<amount>[unit]`` into milliseconds (no unit means milliseconds)."""
    match = _DURATION_PATTERN.match(str(value).strip())
    if not match:
        return None
    unit = (match.group("unit") or "ms").lower()
    return float(match.group("amount")) * _MULTIPLIERS[unit]


def format_duration(seconds: float) -> str:
    """Short human form of a duration, e.g. ``90`` -> ``2m``."""
    milliseconds = seconds * SECOND
    for size, suffix in _SHORT_UNITS:
        if abs(milliseconds) >= size:
            return f"{round(milliseconds / size)}{suffix}"
    return f"{round(milliseconds)}ms"


class DurationArgumentType(ArgumentType):
    """Durations between one second and one year.

    ``min``/``max`` are expressed in seconds. Parses to a ``timedelta``.
    """

    def __init__(self):
        super().__init__("duration")

    def validate(self, value, message, argument, current=None):
        milliseconds = parse_milliseconds(value)
        if not milliseconds or milliseconds < SECOND:
            return INVALID_FORMAT
        if milliseconds > YEAR:
            return TOO_LONG

        seconds = milliseconds / SECOND
        if argument.min is not None and seconds < argument.min:
            return f"Please enter a duration above or exactly {format_duration(argument.min)}."
        if argument.max is not None and seconds > argument.max:
            return f"Please enter a duration below or exactly {format_duration(argument.max)}."

        return True

    def parse(self, value, message, argument, current=None, validated=None):
        return timedelta(milliseconds=parse_milliseconds(value))
