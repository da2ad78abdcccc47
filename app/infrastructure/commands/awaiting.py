"""Registry of (user, channel) pairs currently answering argument prompts.

While a user is answering prompts in a channel, their next message there is
a reply and must not be dispatched as a new command. The collector holds
the pair for the whole resolution; the dispatcher asks
:meth:`AwaitingRegistry.should_dispatch` before routing a message.
"""

from collections import Counter
from contextlib import contextmanager
from typing import Iterator, Tuple

from infrastructure.logging import get_module_logger
from infrastructure.platforms.models import ChatMessage

logger = get_module_logger()

AwaitingKey = Tuple[str, str]


class AwaitingRegistry:
    """Process-wide set of ``(user_id, channel_id)`` keys awaiting input.

    Keys are reference counted: a key added twice stays awaiting until it
    has been discarded twice, so overlapping collections for the same user
    and channel each keep it held.

    Example:
        awaiting = AwaitingRegistry()

        with awaiting.hold(message.author_id, message.channel_id):
            ...  # prompts and replies

        if awaiting.should_dispatch(incoming):
            await dispatcher.handle(incoming)
    """

    def __init__(self):
        self._keys: Counter[AwaitingKey] = Counter()

    def add(self, user_id: str, channel_id: str) -> None:
        self._keys[(user_id, channel_id)] += 1

    def discard(self, user_id: str, channel_id: str) -> None:
        """Release one hold on the key; a key that is not held is ignored."""
        key = (user_id, channel_id)
        if self._keys[key] <= 1:
            self._keys.pop(key, None)
        else:
            self._keys[key] -= 1

    def is_awaiting(self, user_id: str, channel_id: str) -> bool:
        return (user_id, channel_id) in self._keys

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    @contextmanager
    def hold(self, user_id: str, channel_id: str) -> Iterator[None]:
        """Mark the pair as awaiting input until the block exits, however it exits."""
        self.add(user_id, channel_id)
        try:
            yield
        finally:
            self.discard(user_id, channel_id)

    def should_dispatch(self, message: ChatMessage) -> bool:
        """Whether ``message`` may be routed to command parsing."""
        if self.is_awaiting(message.author_id, message.channel_id):
            logger.debug(
                "dispatch_suppressed_awaiting_reply",
                user_id=message.author_id,
                channel_id=message.channel_id,
            )
            return False
        return True
