"""Feature-level fixtures for argument resolution tests."""

import itertools
from typing import List, Optional

import pytest

from infrastructure.commands import Argument, AwaitingRegistry, TypeRegistry
from infrastructure.platforms.models import ChatMessage, PlatformUser, PromptContent

USER_ID = "U12345"
CHANNEL_ID = "C67890"

_message_ids = itertools.count(1)


def make_message(
    content: str = "",
    author_id: str = USER_ID,
    channel_id: str = CHANNEL_ID,
    guild_id: Optional[str] = None,
) -> ChatMessage:
    """Build a ChatMessage with a fresh id."""
    return ChatMessage(
        id=f"M{next(_message_ids)}",
        content=content,
        author_id=author_id,
        channel_id=channel_id,
        guild_id=guild_id,
    )


class FakeTransport:
    """Scripted MessageTransport.

    Records every prompt sent and answers ``await_reply`` from a queue of
    reply texts. A queued ``None`` (or an empty queue) simulates a timeout.
    """

    def __init__(self, replies=None):
        self.replies: List[Optional[str]] = list(replies or [])
        self.prompts: List[PromptContent] = []
        self.sent: List[ChatMessage] = []
        self.timeouts: List[Optional[float]] = []

    def queue(self, *replies: Optional[str]) -> "FakeTransport":
        self.replies.extend(replies)
        return self

    async def send_prompt(self, channel_id, prompt, reply_to=None):
        self.prompts.append(prompt)
        sent = make_message(prompt.title, author_id="BOT", channel_id=channel_id)
        self.sent.append(sent)
        return sent

    async def await_reply(self, channel_id, user_id, timeout=None):
        self.timeouts.append(timeout)
        if not self.replies:
            return None
        text = self.replies.pop(0)
        if text is None:
            return None
        return make_message(text, author_id=user_id, channel_id=channel_id)


class FakeDirectory:
    """In-memory UserDirectory."""

    def __init__(self, users: List[PlatformUser]):
        self.users = {user.id: user for user in users}
        self.fetch_calls = 0
        self.search_calls = 0

    async def fetch_user(self, user_id):
        self.fetch_calls += 1
        return self.users.get(user_id)

    async def search_users(self, query, channel_id=None):
        self.search_calls += 1
        return list(self.users.values())


@pytest.fixture
def transport():
    """Scripted transport with an empty reply queue."""
    return FakeTransport()


@pytest.fixture
def message():
    """Triggering message from the default user and channel."""
    return make_message("!cmd")


@pytest.fixture
def users():
    return [
        PlatformUser(id="111", username="alice", display_name="Alice A"),
        PlatformUser(id="222", username="alicia"),
        PlatformUser(id="333", username="bob", discriminator="0042"),
    ]


@pytest.fixture
def directory(users):
    return FakeDirectory(users)


@pytest.fixture
def registry(directory):
    """Type registry with the built-in types and the user type."""
    return TypeRegistry().register_defaults(directory)


@pytest.fixture
def awaiting():
    return AwaitingRegistry()


@pytest.fixture
def message_factory():
    """Factory for ChatMessage instances."""
    return make_message


@pytest.fixture
def argument_factory(registry, transport):
    """Factory for Arguments bound to the test registry and transport.

    Keyword arguments are ArgumentInfo fields; ``key`` and ``prompt`` have
    defaults.
    """

    def _factory(**info):
        info.setdefault("key", "value")
        info.setdefault("prompt", "What value?")
        return Argument(registry, transport, info)

    return _factory
