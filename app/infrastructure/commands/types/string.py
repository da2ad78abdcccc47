"""Free-text argument type."""

from infrastructure.commands.types.base import ArgumentType, choices_message


class StringArgumentType(ArgumentType):
    """Accepts any text.

    ``one_of`` is compared case-insensitively; ``min``/``max`` bound the length.
    """

    def __init__(self):
        super().__init__("string")

    def validate(self, value, message, argument, current=None):
        if argument.one_of and value.lower() not in argument.one_of:
            return choices_message(argument.one_of)
        if argument.min is not None and len(value) < argument.min:
            return (
                f"Please keep the {argument.label} above or exactly "
                f"{argument.min} characters."
            )
        if argument.max is not None and len(value) > argument.max:
            return (
                f"Please keep the {argument.label} below or exactly "
                f"{argument.max} characters."
            )
        return True

    def parse(self, value, message, argument, current=None, validated=None):
        return value
