"""Platform-agnostic data models for conversational command input.

These models provide a standard interface for platform-specific data,
allowing argument resolution to remain platform-independent while
platform transports translate their native formats to/from these models.

Usage:
    # Platform transport normalizes an incoming message
    message = ChatMessage(
        id="M1",
        content="!remind 10m stretch",
        author_id="U12345",
        channel_id="C67890",
    )

    # Argument resolution builds prompts in the standard format
    prompt = PromptContent(title="How long?", body="Respond with `cancel`...")

    # Platform transport renders the prompt (embed, blocks, card)
    await transport.send_prompt(message.channel_id, prompt, reply_to=message)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


@dataclass
class ChatMessage:
    """Platform-agnostic chat message.

    Used for the message that triggered a command, for every prompt the
    bot sends, and for every answer the user replies with.

    Attributes:
        id: Platform-specific message ID
        content: Raw text content of the message
        author_id: Platform-specific ID of the message author
        channel_id: Channel/conversation ID the message was posted in
        guild_id: Workspace/guild/team ID (if the platform has one)
        created_at: When the message was created (UTC)
        platform_metadata: Platform-specific extras not normalized
    """

    id: str
    content: str
    author_id: str
    channel_id: str
    guild_id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    platform_metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PlatformUser:
    """Platform-agnostic user record returned by a user directory."""

    id: str
    username: str
    display_name: Optional[str] = None
    discriminator: Optional[str] = None

    @property
    def tag(self) -> str:
        """Unique display handle (``name#1234`` where discriminators exist)."""
        if self.discriminator:
            return f"{self.username}#{self.discriminator}"
        return self.username


class PromptColor(str, Enum):
    """Accent of a prompt: neutral first ask or flagged re-ask."""

    INFO = "info"
    ERROR = "error"


@dataclass
class PromptContent:
    """Platform-agnostic prompt asking the user for an argument value.

    Attributes:
        title: The argument's question text
        body: Instructions (cancel/finish keywords)
        description: Specific rejection reason for a re-ask
        footer: Countdown notice when a wait timeout applies
        color: Neutral for a first ask, flagged after an invalid answer
    """

    title: str
    body: str
    description: Optional[str] = None
    footer: Optional[str] = None
    color: PromptColor = PromptColor.INFO


@dataclass
class CommandResponse:
    """Platform-agnostic command response."""

    message: str
    ephemeral: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)


__all__ = [
    "ChatMessage",
    "PlatformUser",
    "PromptColor",
    "PromptContent",
    "CommandResponse",
]
