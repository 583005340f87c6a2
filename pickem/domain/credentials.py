"""
Password hashing - bcrypt behind an async interface.

bcrypt is CPU bound, so both operations run in a worker thread and never
stall the event loop. bcrypt only considers the first 72 bytes of its input;
longer passwords are truncated explicitly before hashing and verifying.
"""

import asyncio

import bcrypt

from pickem.config.settings import Settings

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class CredentialHasher:
    """Salted one-way password hashing with a configured work factor."""

    def __init__(self, settings: Settings) -> None:
        self._rounds = settings.bcrypt_cost

    async def hash(self, password: str) -> str:
        """Hash ``password`` with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = await asyncio.to_thread(bcrypt.hashpw, _encode(password), salt)
        return hashed.decode()

    async def verify(self, password: str, password_hash: str) -> bool:
        """
        Check ``password`` against a stored hash.

        Returns False for a wrong password and for a malformed hash.
        """
        try:
            return await asyncio.to_thread(
                bcrypt.checkpw, _encode(password), password_hash.encode()
            )
        except (ValueError, TypeError):
            return False
