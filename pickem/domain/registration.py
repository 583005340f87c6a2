"""
Registration domain service.

A signup attempt moves forward through these states and never retries:

    Received -> Validated -> UsernameChecked -> Hashed -> Persisted -> Projected

Any state can end in an error carrying the first violation found. The
username count is only a fast path: two concurrent signups can both pass it,
so the repository's create() must enforce uniqueness itself and raise
UsernameTaken when it loses the race.
"""

import logging
from dataclasses import dataclass
from typing import Any

from .credentials import CredentialHasher
from .exceptions import UsernameTaken
from .ports import PublicUser, UserRepository
from .validation import validate_signup

logger = logging.getLogger(__name__)


@dataclass
class UserRegistrar:
    """
    Domain service for user signup.

    Orchestrates validation, the uniqueness check, password hashing and
    persistence, and hands back the public projection of the new user.
    """

    repository: UserRepository
    hasher: CredentialHasher

    async def register(self, payload: Any) -> PublicUser:
        """
        Register a new user.

        Args:
            payload: Decoded signup body (``username``, ``password``, ``name``)

        Returns:
            Public projection of the created user

        Raises:
            ValidationFailed: Invalid input or username already taken
        """
        data = validate_signup(payload)
        logger.debug("Signup validated for %s", data.username)

        if await self.repository.count(data.username) > 0:
            logger.info("Signup rejected, username taken: %s", data.username)
            raise UsernameTaken()

        password_hash = await self.hasher.hash(data.password)

        user = await self.repository.create(data.username, password_hash, data.name)
        logger.info("Registered user %s", user.username)
        return user.public()
