"""Platform abstraction layer for collaboration platforms.

This package provides the platform-agnostic models and transport protocols
that conversational argument resolution is written against.

Key Components:
    - Models: Platform-agnostic messages, users, prompts and responses
    - Transport: Protocols for sending prompts and awaiting replies
"""

from infrastructure.platforms.models import (
    ChatMessage,
    CommandResponse,
    PlatformUser,
    PromptColor,
    PromptContent,
)
from infrastructure.platforms.transport import MessageTransport, UserDirectory

__all__ = [
    # Models
    "ChatMessage",
    "CommandResponse",
    "PlatformUser",
    "PromptColor",
    "PromptContent",
    # Transport
    "MessageTransport",
    "UserDirectory",
]
