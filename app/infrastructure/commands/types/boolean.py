"""Yes/no argument type."""

from infrastructure.commands.types.base import ArgumentType

TRUTHY = frozenset(
    {"true", "t", "yes", "y", "on", "enable", "enabled", "1", "+"}
)
FALSY = frozenset(
    {"false", "f", "no", "n", "off", "disable", "disabled", "0", "-"}
)


class BooleanArgumentType(ArgumentType):
    def __init__(self):
        super().__init__("boolean")

    def validate(self, value, message, argument, current=None):
        lowered = value.lower()
        return lowered in TRUTHY or lowered in FALSY

    def parse(self, value, message, argument, current=None, validated=None):
        lowered = value.lower()
        if lowered in TRUTHY:
            return True
        if lowered in FALSY:
            return False
        raise ValueError(f"Unknown boolean value: {value!r}")
