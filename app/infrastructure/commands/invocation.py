"""Helpers connecting argument collection to command execution."""

from typing import Optional

from infrastructure.commands.collector import ArgumentCollector
from infrastructure.commands.models import CancelReason, CollectorResult
from infrastructure.commands.parser import split_arguments
from infrastructure.platforms.models import ChatMessage, CommandResponse

CANCELLED_MESSAGE = "Cancelled command."


async def collect_command_arguments(
    collector: ArgumentCollector,
    message: ChatMessage,
    arg_string: str,
    allow_single_quotes: Optional[bool] = None,
    prompt_limit: Optional[float] = None,
) -> CollectorResult:
    """Split ``arg_string`` and obtain every argument of a command.

    When the last argument is infinite, every token is passed on; otherwise
    the text is split into one value per argument with the remainder kept
    in the last one. Single-quote grouping follows the collector unless
    ``allow_single_quotes`` is given.
    """
    if not collector.args:
        return CollectorResult(values={})

    if allow_single_quotes is None:
        allow_single_quotes = collector.allow_single_quotes

    count = None if collector.args[-1].infinite else len(collector.args)
    provided = split_arguments(arg_string, count, allow_single_quotes)
    return await collector.obtain(message, provided, prompt_limit)


def describe_cancellation(
    result: CollectorResult, usage: Optional[str] = None
) -> Optional[CommandResponse]:
    """Build the reply for a cancelled collection.

    Returns None when the collection succeeded. A cancellation without any
    prompt, or one caused by the prompt limit, means the command was used
    incorrectly; anything else was the user's choice or a timeout.
    """
    if not result.is_cancelled:
        return None

    if not result.prompts or result.cancelled == CancelReason.PROMPT_LIMIT:
        text = "Invalid command usage."
        if usage:
            text = f"{text} The command's accepted format is: {usage}."
        return CommandResponse(
            message=text,
            ephemeral=True,
            metadata={"cancelled": result.cancelled.value},
        )

    return CommandResponse(
        message=CANCELLED_MESSAGE,
        ephemeral=True,
        metadata={"cancelled": result.cancelled.value},
    )
