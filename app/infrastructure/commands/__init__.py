"""Conversational command argument resolution.

This package provides:
- TypeRegistry: Register and look up argument value types (unions included)
- Argument: Resolve one argument, prompting the user when needed
- ArgumentCollector: Resolve a command's arguments in order
- AwaitingRegistry: Track users mid-prompt so replies are not dispatched
- split_arguments: Split an argument string into positional values

Example:
    from infrastructure.commands import ArgumentCollector, TypeRegistry

    registry = TypeRegistry().register_defaults(directory)
    collector = ArgumentCollector(
        registry,
        transport,
        [{"key": "when", "prompt": "When?", "type": "duration", "max": 86400}],
    )

    result = await collect_command_arguments(collector, message, "150m")
    response = describe_cancellation(result, usage="remind <when>")
"""

from infrastructure.commands.argument import Argument
from infrastructure.commands.awaiting import AwaitingRegistry
from infrastructure.commands.collector import ArgumentCollector
from infrastructure.commands.exceptions import (
    ArgumentConfigurationError,
    ArgumentError,
    InvalidTypeIdError,
    TypeAlreadyRegisteredError,
    TypeNotRegisteredError,
    UnionParseError,
)
from infrastructure.commands.invocation import (
    collect_command_arguments,
    describe_cancellation,
)
from infrastructure.commands.models import (
    ArgumentInfo,
    ArgumentResult,
    CancelReason,
    CollectorResult,
)
from infrastructure.commands.parser import (
    CommandParseError,
    split_arguments,
    strip_wrapping_quotes,
)
from infrastructure.commands.registry import TypeRegistry
from infrastructure.commands.types import ArgumentType, Resolved

__all__ = [
    "Argument",
    "ArgumentCollector",
    "ArgumentConfigurationError",
    "ArgumentError",
    "ArgumentInfo",
    "ArgumentResult",
    "ArgumentType",
    "AwaitingRegistry",
    "CancelReason",
    "CollectorResult",
    "CommandParseError",
    "InvalidTypeIdError",
    "Resolved",
    "TypeAlreadyRegisteredError",
    "TypeNotRegisteredError",
    "TypeRegistry",
    "UnionParseError",
    "collect_command_arguments",
    "describe_cancellation",
    "split_arguments",
    "strip_wrapping_quotes",
]
