"""Argument string splitting.

Splits the text following a command name into the positional raw values
handed to the argument collector.
"""

import re
from typing import List, Optional

from infrastructure.logging import get_module_logger

logger = get_module_logger()

_DOUBLE_QUOTES = re.compile("[«»“”„‟⹂「」『』〝〞〟﹁﹂﹃﹄＂｢｣]")
_SINGLE_QUOTES = re.compile("[‘’‚‛‹›]")

_TOKEN = re.compile(r"\s*(?:([\"'])(.*?)\1|(\S+))\s*", re.DOTALL)
_TOKEN_DOUBLE_ONLY = re.compile(r"\s*(?:(\")(.*?)\"|(\S+))\s*", re.DOTALL)

_WRAPPED = re.compile(r"^([\"'])(.*)\1$", re.DOTALL)
_WRAPPED_DOUBLE_ONLY = re.compile(r"^(\")(.*)\"$", re.DOTALL)


class CommandParseError(Exception):
    """Error while splitting an argument string."""

    pass


def normalize_quotes(text: str, allow_single_quotes: bool = True) -> str:
    """Replace typographic quotes with their ASCII equivalents."""
    text = _DOUBLE_QUOTES.sub('"', text)
    if allow_single_quotes:
        text = _SINGLE_QUOTES.sub("'", text)
    return text


def strip_wrapping_quotes(text: str, allow_single_quotes: bool = True) -> str:
    """Trim ``text`` and remove one pair of quotes wrapping all of it.

    Example:
        >>> strip_wrapping_quotes('  "hello world" ')
        'hello world'
    """
    pattern = _WRAPPED if allow_single_quotes else _WRAPPED_DOUBLE_ONLY
    return pattern.sub(r"\2", text.strip())


def split_arguments(
    text: str, count: Optional[int] = None, allow_single_quotes: bool = True
) -> List[str]:
    """Split an argument string into quote-aware positional values.

    Args:
        text: Everything after the command name.
        count: Maximum number of values. The last value then holds the rest
            of the text (wrapping quotes removed). ``None`` splits every
            token.
        allow_single_quotes: Whether ``'`` groups words like ``"`` does.

    Returns:
        List of raw values.

    Raises:
        CommandParseError: If ``count`` is less than 1.

    Example:
        >>> split_arguments('alice "two words" rest of it', count=3)
        ['alice', 'two words', 'rest of it']
    """
    if count is not None and count < 1:
        raise CommandParseError("count must be at least 1")

    text = normalize_quotes(text.strip(), allow_single_quotes)
    pattern = _TOKEN if allow_single_quotes else _TOKEN_DOUBLE_ONLY
    values: List[str] = []
    position = 0

    while position < len(text) and (count is None or len(values) < count - 1):
        match = pattern.match(text, position)
        if match is None or match.end() == position:
            break
        values.append(match.group(2) if match.group(1) else match.group(3))
        position = match.end()

    if position < len(text):
        values.append(strip_wrapping_quotes(text[position:], allow_single_quotes))

    logger.debug("argument_string_split", value_count=len(values), limit=count)
    return values
