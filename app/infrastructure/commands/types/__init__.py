"""Built-in command argument value types.

Each type is a stateless strategy with ``validate``/``parse``/``is_empty``.
Types are registered by id in a :class:`~infrastructure.commands.registry.TypeRegistry`.
"""

from infrastructure.commands.types.base import (
    ArgumentType,
    Resolved,
    ValidationResult,
    disambiguation,
    is_valid,
    maybe_await,
)
from infrastructure.commands.types.boolean import BooleanArgumentType
from infrastructure.commands.types.date import DateArgumentType
from infrastructure.commands.types.duration import DurationArgumentType
from infrastructure.commands.types.number import (
    FloatArgumentType,
    IntegerArgumentType,
    NumberArgumentType,
)
from infrastructure.commands.types.string import StringArgumentType
from infrastructure.commands.types.time import TimeArgumentType
from infrastructure.commands.types.union import UnionArgumentType
from infrastructure.commands.types.user import UserArgumentType

__all__ = [
    "ArgumentType",
    "Resolved",
    "ValidationResult",
    "disambiguation",
    "is_valid",
    "maybe_await",
    "BooleanArgumentType",
    "DateArgumentType",
    "DurationArgumentType",
    "FloatArgumentType",
    "IntegerArgumentType",
    "NumberArgumentType",
    "StringArgumentType",
    "TimeArgumentType",
    "UnionArgumentType",
    "UserArgumentType",
]
