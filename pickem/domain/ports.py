"""
Port interfaces - User entity and persistence protocol.

The domain depends on the UserRepository protocol only; adapters under
``pickem.adapters.repository`` implement it.
"""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class PublicUser:
    """Client-safe projection of a user (no hash material)."""

    username: str
    name: str
    points: int = 0
    picks: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class User:
    """Persisted user record."""

    username: str
    password_hash: str
    name: str
    points: int = 0
    picks: dict[str, str] = field(default_factory=dict)

    def public(self) -> PublicUser:
        """Project every field except the password hash."""
        return PublicUser(
            username=self.username,
            name=self.name,
            points=self.points,
            picks=dict(self.picks),
        )


@dataclass(frozen=True)
class VerifiedIdentity:
    """Identity carried by a verified bearer token."""

    username: str
    name: str


class UserRepository(Protocol):
    """Port interface for user persistence."""

    async def create(self, username: str, password_hash: str, name: str) -> User:
        """
        Insert a new user with zero points and no picks.

        Raises:
            UsernameTaken: If the storage layer already holds ``username``
        """
        ...

    async def count(self, username: str) -> int:
        """Return how many users hold ``username`` (0 or 1)."""
        ...

    async def find_all(self) -> list[User]:
        """Return every user, unordered; ranking is the caller's concern."""
        ...

    async def find_one(self, username: str) -> User | None:
        """Return the user with ``username`` or None."""
        ...

    async def remove(self, username: str | None = None) -> int:
        """
        Delete one user, or every user when ``username`` is None.

        Returns:
            Number of deleted records
        """
        ...

    async def ping(self) -> None:
        """Raise if the storage backend is unreachable."""
        ...
