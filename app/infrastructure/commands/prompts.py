"""Prompt builders for conversational argument resolution."""

from typing import TYPE_CHECKING, Any, Optional

from infrastructure.platforms.models import PromptColor, PromptContent

if TYPE_CHECKING:
    from infrastructure.commands.argument import Argument

CANCEL_KEYWORD = "cancel"
FINISH_KEYWORD = "finish"

MAX_QUOTED_LENGTH = 1850

_DONT_REPEAT = "**Don't type the whole command again!** Only what I ask for."


def countdown_footer(argument: "Argument", unless_respond: bool = False) -> Optional[str]:
    """Footer announcing the automatic cancellation, if a timeout applies."""
    if argument.timeout is None:
        return None
    suffix = ", unless you respond" if unless_respond else ""
    return (
        f"The command will automatically be cancelled in "
        f"{argument.wait:g} seconds{suffix}."
    )


def escape_value(value: str) -> str:
    """Neutralize markdown and mentions in a user-supplied value."""
    escaped = value
    for char in ("\\", "*", "_", "`", "~", "|", ">"):
        escaped = escaped.replace(char, f"\\{char}")
    return escaped.replace("@", "@\u200b")


def build_prompt(argument: "Argument", valid: Any, empty: bool) -> PromptContent:
    """Prompt for a single value.

    A first ask (nothing usable supplied yet) is neutral; a re-ask after an
    invalid value is flagged and shows the rejection reason.
    """
    prompt = PromptContent(
        title=argument.prompt,
        body=f"{_DONT_REPEAT}\nRespond with `{CANCEL_KEYWORD}` to cancel the command.",
        footer=countdown_footer(argument),
        color=PromptColor.INFO if empty and argument.prompt else PromptColor.ERROR,
    )
    if not empty:
        prompt.description = (
            f"**{valid}**"
            if isinstance(valid, str) and valid
            else f"You provided an invalid {argument.label}. Please try again."
        )
    return prompt


def build_infinite_prompt(
    argument: "Argument", value: Optional[str], valid: Any
) -> PromptContent:
    """Prompt for one more value of an infinite argument.

    Without a rejected ``value`` this is the neutral first ask.
    """
    if not value:
        return PromptContent(
            title=argument.prompt,
            body=(
                f"{_DONT_REPEAT}\nRespond with `{CANCEL_KEYWORD}` to cancel the "
                f"command, or `{FINISH_KEYWORD}` to finish entry."
            ),
            footer=countdown_footer(argument, unless_respond=True),
            color=PromptColor.INFO,
        )

    escaped = escape_value(value)
    shown = escaped if len(escaped) < MAX_QUOTED_LENGTH else "[too long to show]"
    return PromptContent(
        title=argument.prompt,
        body=(
            f"{_DONT_REPEAT}\nRespond with `{CANCEL_KEYWORD}` to cancel the command, "
            f"or `{FINISH_KEYWORD}` to finish entry up to this point."
        ),
        description=(
            valid
            if isinstance(valid, str) and valid
            else f'You provided an invalid {argument.label}, "{shown}". Please try again.'
        ),
        footer=countdown_footer(argument),
        color=PromptColor.ERROR,
    )
