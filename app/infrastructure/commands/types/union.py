"""Union argument type: several registered types tried in priority order."""

import asyncio
from typing import TYPE_CHECKING, Any, List

from infrastructure.commands.exceptions import TypeNotRegisteredError, UnionParseError
from infrastructure.commands.types.base import ArgumentType, is_valid, maybe_await

if TYPE_CHECKING:
    from infrastructure.commands.registry import TypeRegistry

SEPARATOR = "|"


class UnionArgumentType(ArgumentType):
    """A type that accepts a value if any of its candidate types does.

    Built from a composite id such as ``"user|string"``; each part must
    already be registered. Parsing uses the first candidate, in declared
    order, whose validation succeeds.

    Attributes:
        types: Candidate types in priority order
    """

    def __init__(self, registry: "TypeRegistry", type_id: str):
        super().__init__(type_id)
        self.types: List[ArgumentType] = []
        for part in type_id.split(SEPARATOR):
            candidate = registry.get(part)
            if candidate is None:
                raise TypeNotRegisteredError(f'Argument type "{part}" is not registered.')
            self.types.append(candidate)

    async def _validate_all(self, value, message, argument, current) -> List[Any]:
        async def run(candidate: ArgumentType) -> Any:
            if candidate.is_empty(value, message, argument, current):
                return False
            return await maybe_await(candidate.validate(value, message, argument, current))

        return list(await asyncio.gather(*(run(candidate) for candidate in self.types)))

    async def validate(self, value, message, argument, current=None):
        results = await self._validate_all(value, message, argument, current)
        if any(is_valid(result) for result in results):
            return True

        errors = [result for result in results if isinstance(result, str)]
        if errors:
            return "\n".join(errors)
        return False

    async def parse(self, value, message, argument, current=None, validated=None):
        results = await self._validate_all(value, message, argument, current)
        for candidate, result in zip(self.types, results):
            if is_valid(result):
                return await maybe_await(
                    candidate.parse(value, message, argument, current, validated=result)
                )

        raise UnionParseError(f'Couldn\'t parse value "{value}" with union type {self.id}.')

    def is_empty(self, value, message, argument, current=None):
        return all(
            candidate.is_empty(value, message, argument, current) for candidate in self.types
        )
