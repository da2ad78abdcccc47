"""Argument collector: resolves a command's arguments in order."""

import math
from typing import Any, Dict, List, Optional, Sequence, Union

from infrastructure.commands.argument import DEFAULT_WAIT, Argument
from infrastructure.commands.awaiting import AwaitingRegistry
from infrastructure.commands.exceptions import ArgumentConfigurationError
from infrastructure.commands.models import ArgumentInfo, CollectorResult
from infrastructure.commands.registry import TypeRegistry
from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.platforms.models import ChatMessage
from infrastructure.platforms.transport import MessageTransport

logger = get_module_logger()

ArgumentDefinition = Union[Argument, ArgumentInfo, Dict[str, Any]]


class ArgumentCollector:
    """Obtains values for a list of arguments.

    The argument list is checked once at construction: an infinite argument
    must be last, and required arguments may not follow optional ones.

    Attributes:
        args: Arguments in positional order
        prompt_limit: Default maximum prompts per argument
        allow_single_quotes: Whether single quotes group words when the
            argument string is split
        awaiting: Registry marking the user as mid-prompt while collecting

    Example:
        collector = ArgumentCollector(
            registry,
            transport,
            [
                {"key": "user", "prompt": "Who?", "type": "user"},
                {"key": "reason", "prompt": "Why?", "type": "string", "default": ""},
            ],
        )
        result = await collector.obtain(message, ["@alice"])
        if not result.is_cancelled:
            result.values  # {"user": PlatformUser(...), "reason": ""}
    """

    def __init__(
        self,
        registry: TypeRegistry,
        transport: MessageTransport,
        args: Sequence[ArgumentDefinition],
        prompt_limit: float = math.inf,
        awaiting: Optional[AwaitingRegistry] = None,
        default_wait: float = DEFAULT_WAIT,
        allow_single_quotes: bool = True,
    ):
        self.registry = registry
        self.transport = transport
        self.prompt_limit = prompt_limit
        self.allow_single_quotes = allow_single_quotes
        self.awaiting = awaiting if awaiting is not None else AwaitingRegistry()
        self.args: List[Argument] = []

        has_infinite = False
        has_optional = False
        for definition in args:
            if has_infinite:
                raise ArgumentConfigurationError(
                    "No other argument may come after an infinite argument."
                )

            argument = (
                definition
                if isinstance(definition, Argument)
                else Argument(registry, transport, definition, default_wait=default_wait)
            )
            if argument.has_default:
                has_optional = True
            elif has_optional:
                raise ArgumentConfigurationError(
                    "Required arguments may not come after optional arguments."
                )
            if argument.infinite:
                has_infinite = True

            self.args.append(argument)

    async def obtain(
        self,
        message: ChatMessage,
        provided: Optional[Sequence[Any]] = None,
        prompt_limit: Optional[float] = None,
    ) -> CollectorResult:
        """Obtain values for every argument, prompting where needed.

        Args:
            message: The message that triggered the command.
            provided: Raw values already supplied, one per argument position.
                An infinite argument receives every value from its position on.
            prompt_limit: Overrides the collector's prompt limit for this call.

        Returns:
            CollectorResult: Values by key, or the first cancellation reason
            with every prompt and answer seen up to that point.
        """
        provided = list(provided or [])
        if prompt_limit is None:
            prompt_limit = self.prompt_limit

        values: Dict[str, Any] = {}
        prompts: List[ChatMessage] = []
        answers: List[ChatMessage] = []

        with self.awaiting.hold(message.author_id, message.channel_id), bind_request_context(
            correlation_id=message.id,
            user_id=message.author_id,
            channel_id=message.channel_id,
            guild_id=message.guild_id,
            message_id=message.id,
        ):
            for index, argument in enumerate(self.args):
                if argument.infinite:
                    value = provided[index:]
                else:
                    value = provided[index] if index < len(provided) else None

                result = await argument.obtain(message, value, prompt_limit)
                prompts.extend(result.prompts)
                answers.extend(result.answers)

                if result.is_cancelled:
                    logger.info(
                        "argument_collection_cancelled",
                        argument=argument.key,
                        reason=result.cancelled.value,
                        prompt_count=len(prompts),
                    )
                    return CollectorResult(
                        cancelled=result.cancelled, prompts=prompts, answers=answers
                    )

                values[argument.key] = result.value

            logger.info(
                "argument_collection_completed",
                argument_count=len(self.args),
                prompt_count=len(prompts),
            )
        return CollectorResult(values=values, prompts=prompts, answers=answers)
