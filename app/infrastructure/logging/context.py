"""Invocation context binding for structured logging.

This module provides utilities for binding invocation-scoped context
to logs, so every log entry emitted while a command's arguments are being
resolved carries the user and channel it belongs to.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(correlation_id=message.id, user_id=message.author_id):
        # All logs within this block will include the context
        logger.info("argument_prompt_sent")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    user_id: Optional[str] = None,
    channel_id: Optional[str] = None,
    guild_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind invocation-scoped context to all logs within the context manager.

    Structlog context variables are copied into each asyncio task, so
    concurrent resolutions for different users never see each other's
    context.

    Args:
        correlation_id: Unique invocation identifier. Auto-generated if not provided.
        user_id: ID of the invoking user (if available).
        channel_id: ID of the channel the command was invoked in.
        guild_id: ID of the workspace/guild (if the platform has one).
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is automatically bound to structlog's context vars.

    Example:
        with bind_request_context(
            correlation_id=message.id,
            user_id=message.author_id,
            channel_id=message.channel_id,
            command="remind",
        ):
            await collector.obtain(message, provided)
    """
    context: dict[str, Any] = {}

    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    if user_id is not None:
        context["user_id"] = user_id

    if channel_id is not None:
        context["channel_id"] = channel_id

    if guild_id is not None:
        context["guild_id"] = guild_id

    context.update(extra_context)

    tokens = structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)
