"""
User directory - read side and password login.

authenticate() always runs exactly one bcrypt comparison: against the stored
hash when the user exists, otherwise against a precomputed dummy hash. An
unknown username and a wrong password therefore look the same from outside,
both in the response and in its timing.
"""

import logging
from dataclasses import dataclass

import bcrypt

from .credentials import CredentialHasher
from .exceptions import InvalidCredentials, UserNotFound
from .ports import PublicUser, UserRepository, VerifiedIdentity

logger = logging.getLogger(__name__)

_DUMMY_BCRYPT_HASH = bcrypt.hashpw(b"dummy_password_for_timing_safety", bcrypt.gensalt(10)).decode()


@dataclass
class UserDirectory:
    """Lookup and login over the user repository."""

    repository: UserRepository
    hasher: CredentialHasher

    async def leaderboard(self) -> list[PublicUser]:
        """Every user, highest points first."""
        users = await self.repository.find_all()
        ranked = sorted(users, key=lambda user: user.points, reverse=True)
        return [user.public() for user in ranked]

    async def get(self, username: str) -> PublicUser:
        """
        Look up one user.

        Raises:
            UserNotFound: No such user (surfaces as a generic 500)
        """
        user = await self.repository.find_one(username)
        if user is None:
            raise UserNotFound(username)
        return user.public()

    async def authenticate(self, username: str, password: str) -> VerifiedIdentity:
        """
        Check a username/password pair.

        Raises:
            InvalidCredentials: Unknown user or wrong password
        """
        user = await self.repository.find_one(username)
        stored_hash = user.password_hash if user is not None else _DUMMY_BCRYPT_HASH

        password_valid = await self.hasher.verify(password, stored_hash)

        if user is None or not password_valid:
            logger.info("Login failed for %s", username)
            raise InvalidCredentials()

        return VerifiedIdentity(username=user.username, name=user.name)
