"""User argument type backed by a platform user directory.

Accepts a mention (``<@U123>``, ``<@!123>``, ``<@U123|alice>``), a raw id, or
a (partial) username/display name. Validation performs the lookup and
returns ``Resolved(user)`` so ``parse`` never repeats it.
"""

import re
from typing import List

from infrastructure.commands.types.base import ArgumentType, Resolved, disambiguation
from infrastructure.platforms.models import PlatformUser
from infrastructure.platforms.transport import UserDirectory

MENTION_PATTERN = re.compile(r"^(?:<@!?(?P<mention>\w+)(?:\|[^>]*)?>|(?P<id>\d+))$")

MAX_DISAMBIGUATION = 15


def _names(user: PlatformUser) -> List[str]:
    names = [user.username.lower(), user.tag.lower()]
    if user.display_name:
        names.append(user.display_name.lower())
    return names


def _matches_inexact(user: PlatformUser, search: str) -> bool:
    return any(search in name for name in _names(user))


def _matches_exact(user: PlatformUser, search: str) -> bool:
    return search in _names(user)


class UserArgumentType(ArgumentType):
    """Platform users, resolved through a :class:`UserDirectory`.

    ``one_of`` restricts the accepted user ids. Lookup errors propagate.
    """

    def __init__(self, directory: UserDirectory):
        super().__init__("user")
        self.directory = directory

    async def _find(self, value: str, message) -> List[PlatformUser]:
        """Look up candidates by id, or by name within the channel."""
        match = MENTION_PATTERN.match(value.strip())
        if match:
            user = await self.directory.fetch_user(match.group("mention") or match.group("id"))
            return [user] if user else []

        search = value.strip().lower()
        users = await self.directory.search_users(search, channel_id=message.channel_id)
        return [user for user in users if _matches_inexact(user, search)]

    async def validate(self, value, message, argument, current=None):
        users = await self._find(value, message)
        if not users:
            return False

        if len(users) > 1:
            search = value.strip().lower()
            exact = [user for user in users if _matches_exact(user, search)]
            if len(exact) == 1:
                users = exact
            else:
                if exact:
                    users = exact
                if len(users) <= MAX_DISAMBIGUATION:
                    return disambiguation([user.tag for user in users], "users") + "\n"
                return "Multiple users found. Please be more specific."

        user = users[0]
        if argument.one_of and user.id.lower() not in argument.one_of:
            return False
        return Resolved(user)

    async def parse(self, value, message, argument, current=None, validated=None):
        if isinstance(validated, Resolved):
            return validated.value

        users = await self._find(value, message)
        if len(users) == 1:
            return users[0]
        search = value.strip().lower()
        exact = [user for user in users if _matches_exact(user, search)]
        return exact[0] if len(exact) == 1 else None
