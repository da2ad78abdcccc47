"""Date argument type (``25/12``, ``25/12/2030 18:30``, ``1/2 5pm +2``, ``now``)."""

import re
from datetime import datetime
from typing import Optional

import arrow

from infrastructure.commands.types.base import ArgumentType

DATE_PATTERN = re.compile(
    r"^(?P<date>[0-3]?\d[/\-.,][01]?\d(?:[/\-.,]\d{2})?(?:\d{2})?)?\s*"
    r"(?P<time>[0-2]?\d(?::[0-5]?\d)?)?\s*"
    r"(?P<ampm>[aApP]\.?[mM]\.?)?\s*"
    r"(?P<tz>[+-]\d\d?)?$"
)

INVALID_FORMAT = (
    "Please enter a valid date format. Use the `help` command for more information."
)


def _utc_offset(tz: Optional[str]) -> str:
    hours = int(tz or 0)
    sign = "-" if hours < 0 else "+"
    return f"{sign}{abs(hours):02d}:00"


def build_moment(
    date: Optional[str],
    time: Optional[str],
    ampm: Optional[str],
    tz: Optional[str],
) -> Optional[arrow.Arrow]:
    """Combine the matched date/time pieces into a UTC moment.

    Missing pieces fall back to the current date/time in the given offset.
    Returns None when the pieces don't form a real moment (e.g. 31/02).
    """
    tzinfo = _utc_offset(tz)
    now = arrow.utcnow().to(tzinfo)

    if date:
        parts = re.split(r"[/\-.,]", date)
        day, month = int(parts[0]), int(parts[1])
        year = now.year
        if len(parts) > 2:
            year = int(parts[2]) + 2000 if len(parts[2]) == 2 else int(parts[2])
    else:
        day, month, year = now.day, now.month, now.year

    if time:
        pieces = time.split(":")
        hour = int(pieces[0])
        minute = int(pieces[1]) if len(pieces) > 1 else 0
        meridiem = ampm.lower().replace(".", "") if ampm else None
        if meridiem == "pm" and hour < 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0
    else:
        hour, minute = now.hour, now.minute

    try:
        moment = arrow.Arrow(year, month, day, hour, minute, tzinfo=tzinfo)
    except ValueError:
        return None
    return moment.to("utc")


def parse_date(value: str) -> Optional[datetime]:
    text = str(value).strip()
    if text.lower() == "now":
        return arrow.utcnow().datetime

    match = DATE_PATTERN.match(text)
    if not match or not any(match.groupdict().values()):
        return None

    moment = build_moment(**match.groupdict())
    return moment.datetime if moment else None


class DateArgumentType(ArgumentType):
    """Calendar dates with optional time, am/pm and UTC offset.

    By default the date must be in the future and at most a year ahead.
    Parses to an aware UTC ``datetime``.
    """

    def __init__(self, require_future: bool = True):
        super().__init__("date")
        self.require_future = require_future

    def validate(self, value, message, argument, current=None):
        date = parse_date(value)
        if date is None:
            return INVALID_FORMAT
        if not self.require_future:
            return True

        now = arrow.utcnow()
        if date <= now.datetime:
            return "Please enter a date that's in the future."
        if date > now.shift(years=1).datetime:
            return "The max. usable date is `1 year` in the future. Please try again."

        return True

    def parse(self, value, message, argument, current=None, validated=None):
        return parse_date(value)
