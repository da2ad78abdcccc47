"""Argument type registry for registration and lookup."""

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from infrastructure.commands.exceptions import (
    TypeAlreadyRegisteredError,
    TypeNotRegisteredError,
)
from infrastructure.commands.types import (
    ArgumentType,
    BooleanArgumentType,
    DateArgumentType,
    DurationArgumentType,
    FloatArgumentType,
    IntegerArgumentType,
    StringArgumentType,
    TimeArgumentType,
    UnionArgumentType,
    UserArgumentType,
)
from infrastructure.commands.types.union import SEPARATOR
from infrastructure.logging import get_module_logger
from infrastructure.platforms.transport import UserDirectory

logger = get_module_logger()

TypeFactory = Callable[["TypeRegistry"], ArgumentType]


class TypeRegistry:
    """Registry of argument value types keyed by id.

    Instances and factories are registered through separate calls so the
    caller always states which one it is passing. Union types are created
    on first request and cached under their composite id.

    Example:
        registry = TypeRegistry().register_defaults()

        registry.register(ColourArgumentType())
        registry.register_factory(lambda reg: UserArgumentType(directory))

        registry.resolve("integer|string")  # cached UnionArgumentType
    """

    def __init__(self):
        self._types: Dict[str, ArgumentType] = {}

    def register(self, argument_type: ArgumentType) -> "TypeRegistry":
        """Register a type instance.

        Raises:
            TypeAlreadyRegisteredError: If the id is already taken.
        """
        if not isinstance(argument_type, ArgumentType):
            raise TypeError(f"Invalid type object to register: {argument_type!r}")
        if argument_type.id in self._types:
            raise TypeAlreadyRegisteredError(
                f'An argument type with the ID "{argument_type.id}" is already registered.'
            )

        self._types[argument_type.id] = argument_type
        logger.debug("argument_type_registered", type_id=argument_type.id)
        return self

    def register_factory(self, factory: TypeFactory) -> "TypeRegistry":
        """Build a type by calling ``factory(registry)`` and register it."""
        return self.register(factory(self))

    def register_many(self, argument_types: Iterable[ArgumentType]) -> "TypeRegistry":
        for argument_type in argument_types:
            self.register(argument_type)
        return self

    def register_defaults(
        self, directory: Optional[UserDirectory] = None
    ) -> "TypeRegistry":
        """Register the built-in types.

        Args:
            directory: User directory backing the ``user`` type. The type is
                only registered when a directory is given.
        """
        self.register_many(
            [
                StringArgumentType(),
                IntegerArgumentType(),
                FloatArgumentType(),
                BooleanArgumentType(),
                DurationArgumentType(),
                DateArgumentType(),
                TimeArgumentType(),
            ]
        )
        if directory is not None:
            self.register(UserArgumentType(directory))
        return self

    def get(self, type_id: str) -> Optional[ArgumentType]:
        return self._types.get(type_id)

    def has(self, type_id: str) -> bool:
        return type_id in self._types

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types

    def __len__(self) -> int:
        return len(self._types)

    @property
    def ids(self) -> List[str]:
        return list(self._types)

    def resolve(self, type_id: Union[str, Sequence[str]]) -> ArgumentType:
        """Get the type for an argument's ``type`` field.

        A composite id (``"a|b"`` or ``["a", "b"]``) yields a union type,
        created and registered on first use.

        Raises:
            TypeNotRegisteredError: If any referenced id is unknown.
        """
        if not isinstance(type_id, str):
            type_id = SEPARATOR.join(type_id)

        existing = self._types.get(type_id)
        if existing is not None:
            return existing

        if SEPARATOR not in type_id:
            raise TypeNotRegisteredError(f'Argument type "{type_id}" isn\'t registered.')

        union = UnionArgumentType(self, type_id)
        self.register(union)
        return union
