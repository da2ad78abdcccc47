"""Base class and helpers for command argument value types.

A value type is a stateless strategy for one kind of value (integer,
duration, user, ...) implementing three operations, each given
``(value, message, argument, current)``:

- ``is_empty``: whether the raw input counts as "nothing supplied"
- ``validate``: ``True`` (or a :class:`Resolved`) when acceptable, a string
  with a user-facing rejection reason, or ``False``; may be async
- ``parse``: convert an already-validated raw value into the final value;
  may be async

Types never keep per-call state on the instance. A type that has to look
something up while validating returns ``Resolved(entity)`` and receives it
back in ``parse(..., validated=...)`` instead of caching it on ``self``.
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from infrastructure.commands.exceptions import InvalidTypeIdError
from infrastructure.platforms.models import ChatMessage

if TYPE_CHECKING:
    from infrastructure.commands.argument import Argument


@dataclass(frozen=True)
class Resolved:
    """Successful validation carrying the entity the validator looked up."""

    value: Any


ValidationResult = Union[bool, str, Resolved]


def is_valid(result: Any) -> bool:
    """Whether a validation result means "accepted"."""
    return bool(result) and not isinstance(result, str)


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


def disambiguation(items: Iterable[str], label: str) -> str:
    """Build a "be more specific" message listing ambiguous matches.

    Example:
        >>> disambiguation(["alice", "alice b"], "users")
        'Multiple users found, please be more specific: "alice",   "alice\\xa0b"'
    """
    item_list = ",   ".join(f'"{item.replace(" ", chr(0xA0))}"' for item in items)
    return f"Multiple {label} found, please be more specific: {item_list}"


def choices_message(one_of: Iterable[Any]) -> str:
    options = ", ".join(f"`{option}`" for option in one_of)
    return f"Please enter one of the following options: {options}"


class ArgumentType(ABC):
    """A type for command arguments.

    Attributes:
        id: Unique lowercase id (what an argument names in ``type``)
    """

    def __init__(self, type_id: str):
        if not isinstance(type_id, str) or not type_id:
            raise InvalidTypeIdError("Argument type ID must be a non-empty string.")
        if type_id != type_id.lower():
            raise InvalidTypeIdError("Argument type ID must be lowercase.")
        self.id = type_id

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"

    @abstractmethod
    def validate(
        self,
        value: str,
        message: ChatMessage,
        argument: "Argument",
        current: Optional[ChatMessage] = None,
    ) -> Any:
        """Validate a raw value against the type.

        Returns:
            ``True``/``Resolved`` when valid, a rejection reason string, or
            ``False``. May return an awaitable resolving to one of those.
        """

    @abstractmethod
    def parse(
        self,
        value: str,
        message: ChatMessage,
        argument: "Argument",
        current: Optional[ChatMessage] = None,
        validated: Any = None,
    ) -> Any:
        """Parse an already-validated raw value into a usable value.

        Args:
            validated: What ``validate`` returned for this value, so lookups
                performed during validation can be reused.
        """

    def is_empty(
        self,
        value: Any,
        message: ChatMessage,
        argument: "Argument",
        current: Optional[ChatMessage] = None,
    ) -> bool:
        """Whether a raw value counts as not supplied.

        This decides whether an optional argument falls back to its default.
        """
        if isinstance(value, (list, tuple)):
            return len(value) == 0
        return not value
