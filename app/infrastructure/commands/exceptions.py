"""Custom exceptions for command argument definitions and value types.

Configuration errors are programmer errors raised while a command's
arguments are being defined; they are never shown to end users. Resolution
outcomes (invalid input, timeouts, cancellation) are not exceptions at all,
they are reported through the result's ``cancelled`` field.
"""


class ArgumentError(Exception):
    """Base exception for all argument-related errors.

    Example:
        try:
            collector = ArgumentCollector(registry, transport, args)
        except ArgumentError as e:
            logger.error("command_definition_invalid", error=str(e))
    """

    pass


class ArgumentConfigurationError(ArgumentError, ValueError):
    """Raised when an argument or collector definition is malformed.

    Example:
        >>> ArgumentCollector(registry, transport, [infinite_arg, other_arg])
        Traceback (most recent call last):
        ...
        ArgumentConfigurationError: No other argument may come after an infinite argument.
    """

    pass


class TypeNotRegisteredError(ArgumentConfigurationError):
    """Raised when an argument refers to a value type id that is not registered.

    Example:
        >>> registry.resolve("colour")
        Traceback (most recent call last):
        ...
        TypeNotRegisteredError: Argument type "colour" isn't registered.
    """

    pass


class TypeAlreadyRegisteredError(ArgumentConfigurationError):
    """Raised when registering a value type whose id is already taken.

    Example:
        >>> registry.register(StringArgumentType())
        >>> registry.register(StringArgumentType())
        Traceback (most recent call last):
        ...
        TypeAlreadyRegisteredError: An argument type with the ID "string" is already registered.
    """

    pass


class InvalidTypeIdError(ArgumentConfigurationError):
    """Raised when a value type id is empty or not lowercase."""

    pass


class UnionParseError(ArgumentError, RuntimeError):
    """Raised when a union type is asked to parse a value no candidate accepts.

    This means ``parse`` was called without a successful ``validate`` first,
    which is a contract violation by the caller.
    """

    pass
