"""
In-memory repository adapter - Implements UserRepository protocol.

Keeps users in a dict guarded by an asyncio.Lock. For local development and
tests; state is lost when the process exits.
"""

import asyncio

from pickem.domain.exceptions import UsernameTaken
from pickem.domain.ports import User


class InMemoryUserRepository:
    """
    Implements UserRepository protocol over a process-local dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = asyncio.Lock()

    async def create(self, username: str, password_hash: str, name: str) -> User:
        """Insert a new user; the check and the insert happen under one lock."""
        async with self._lock:
            if username in self._users:
                raise UsernameTaken()
            user = User(username=username, password_hash=password_hash, name=name)
            self._users[username] = user
            return user

    async def count(self, username: str) -> int:
        return 1 if username in self._users else 0

    async def find_all(self) -> list[User]:
        return list(self._users.values())

    async def find_one(self, username: str) -> User | None:
        return self._users.get(username)

    async def remove(self, username: str | None = None) -> int:
        async with self._lock:
            if username is None:
                removed = len(self._users)
                self._users.clear()
                return removed
            return 1 if self._users.pop(username, None) is not None else 0

    async def ping(self) -> None:
        return None
