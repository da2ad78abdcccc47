"""Numeric argument types (integer and float)."""

import math
import re
from abc import abstractmethod
from typing import Optional, Union

from infrastructure.commands.types.base import ArgumentType, choices_message

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

Number = Union[int, float]


class NumberArgumentType(ArgumentType):
    """Shared validation for numeric types.

    ``one_of`` lists the allowed numbers; ``min``/``max`` bound the value.
    """

    @abstractmethod
    def convert(self, value: str) -> Optional[Number]:
        """Convert raw text to a number, or None when it isn't one."""

    def validate(self, value, message, argument, current=None):
        number = self.convert(value)
        if number is None:
            return False

        if argument.one_of and number not in argument.one_of:
            return choices_message(argument.one_of)
        if argument.min is not None and number < argument.min:
            return f"Please enter a number above or exactly {argument.min}."
        if argument.max is not None and number > argument.max:
            return f"Please enter a number below or exactly {argument.max}."

        return True

    def parse(self, value, message, argument, current=None, validated=None):
        return self.convert(value)


class IntegerArgumentType(NumberArgumentType):
    """Whole numbers in base 10."""

    def __init__(self):
        super().__init__("integer")

    def convert(self, value: str) -> Optional[int]:
        text = str(value).strip()
        if not _INTEGER_PATTERN.match(text):
            return None
        return int(text)


class FloatArgumentType(NumberArgumentType):
    """Finite decimal numbers (never NaN or infinity)."""

    def __init__(self):
        super().__init__("float")

    def convert(self, value: str) -> Optional[float]:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return number
