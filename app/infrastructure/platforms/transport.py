"""Transport protocols consumed by argument resolution.

Platform providers implement these protocols; argument resolution only ever
sends prompts and awaits replies through them, never touching platform
delivery details.
"""

from typing import List, Optional, Protocol, runtime_checkable

from infrastructure.platforms.models import ChatMessage, PlatformUser, PromptContent


@runtime_checkable
class MessageTransport(Protocol):
    """Protocol for sending prompts and awaiting user replies."""

    async def send_prompt(
        self,
        channel_id: str,
        prompt: PromptContent,
        reply_to: Optional[ChatMessage] = None,
    ) -> ChatMessage:  # pragma: no cover - typing helper
        """Send a prompt to a channel and return the sent message."""
        ...

    async def await_reply(
        self,
        channel_id: str,
        user_id: str,
        timeout: Optional[float] = None,
    ) -> Optional[ChatMessage]:  # pragma: no cover - typing helper
        """Wait for the next message from ``user_id`` in ``channel_id``.

        Args:
            channel_id: Channel to listen in.
            user_id: Only messages authored by this user count.
            timeout: Seconds to wait. ``None`` waits without bound.

        Returns:
            The reply, or None when the timeout expired.
        """
        ...


@runtime_checkable
class UserDirectory(Protocol):
    """Protocol for platform user lookups used by the ``user`` value type."""

    async def fetch_user(
        self, user_id: str
    ) -> Optional[PlatformUser]:  # pragma: no cover - typing helper
        ...

    async def search_users(
        self, query: str, channel_id: Optional[str] = None
    ) -> List[PlatformUser]:  # pragma: no cover - typing helper
        ...
