"""Time-of-day argument type (``18:30``, ``5pm``, ``9:15 am -3``, ``now``)."""

import re
from datetime import datetime
from typing import Optional

import arrow

from infrastructure.commands.types.base import ArgumentType
from infrastructure.commands.types.date import INVALID_FORMAT, build_moment

TIME_PATTERN = re.compile(
    r"^(?P<time>[0-2]?\d(?::[0-5]?\d)?)?\s*"
    r"(?P<ampm>[aApP]\.?[mM]\.?)?\s*"
    r"(?P<tz>[+-]\d\d?)?$"
)


def parse_time(value: str) -> Optional[datetime]:
    text = str(value).strip()
    if text.lower() == "now":
        return arrow.utcnow().datetime

    match = TIME_PATTERN.match(text)
    if not match or not match.group("time"):
        return None

    moment = build_moment(date=None, **match.groupdict())
    return moment.datetime if moment else None


class TimeArgumentType(ArgumentType):
    """A time on today's date. Parses to an aware UTC ``datetime``."""

    def __init__(self):
        super().__init__("time")

    def validate(self, value, message, argument, current=None):
        if parse_time(value) is None:
            return INVALID_FORMAT
        return True

    def parse(self, value, message, argument, current=None, validated=None):
        return parse_time(value)
