"""Helpers shared by test modules."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from pickem.adapters.repository.memory import InMemoryUserRepository
from pickem.domain.ports import User

TEST_SECRET = "test-secret-with-at-least-32-bytes-of-entropy"


def sign_token(
    claims: dict[str, Any], secret: str = TEST_SECRET, algorithm: str = "HS256"
) -> str:
    """Sign arbitrary claims, for forging bad tokens in tests."""
    return jwt.encode(claims, secret, algorithm=algorithm)


def identity_claims(
    username: str = "exampleUser",
    name: str = "exampleName",
    expires_in: timedelta = timedelta(days=7),
) -> dict[str, Any]:
    """Claims shaped like the ones TokenIssuer produces."""
    now = datetime.now(timezone.utc)
    return {
        "username": username,
        "name": name,
        "sub": username,
        "iat": now,
        "exp": now + expires_in,
    }


def seed_user(repository: InMemoryUserRepository, user: User) -> None:
    """Store a complete record (points and picks included) without going through create()."""
    repository._users[user.username] = user
