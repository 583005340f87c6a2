"""
Integration tests for PostgresUserRepository.

Tests repository operations against a real PostgreSQL database reached via
DATABASE_URL. Skipped when no database is reachable.
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from pickem.adapters.repository.postgres import PostgresUserRepository, run_migrations
from pickem.config.settings import Settings
from pickem.domain.exceptions import UsernameTaken
from tests.helpers import TEST_SECRET

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def pool() -> AsyncGenerator[AsyncConnectionPool, None]:
    """Open a pool, run migrations and start from an empty users table."""
    settings = Settings(jwt_secret=TEST_SECRET)
    pool = AsyncConnectionPool(
        conninfo=settings.database_url, min_size=1, max_size=10, open=False
    )
    try:
        await pool.open(wait=True, timeout=3)
    except PoolTimeout:
        await pool.close()
        pytest.skip("PostgreSQL is not reachable")

    await run_migrations(pool)
    async with pool.connection() as conn:
        await conn.execute("DELETE FROM users")
        await conn.commit()

    yield pool
    await pool.close()


@pytest.fixture
def repository(pool: AsyncConnectionPool) -> PostgresUserRepository:
    """Create repository instance for each test."""
    return PostgresUserRepository(pool)


async def set_points(pool: AsyncConnectionPool, username: str, points: int, picks: dict) -> None:
    async with pool.connection() as conn:
        await conn.execute(
            "UPDATE users SET points = %s, picks = %s WHERE username = %s",
            (points, Jsonb(picks), username),
        )
        await conn.commit()


class TestCreate:
    """Tests for create."""

    @pytest.mark.asyncio
    async def test_create_returns_defaults(self, repository: PostgresUserRepository) -> None:
        user = await repository.create("alice", "$2b$04$hashedpasswordvalue", "Alice")

        assert user.username == "alice"
        assert user.password_hash == "$2b$04$hashedpasswordvalue"
        assert user.points == 0
        assert user.picks == {}

    @pytest.mark.asyncio
    async def test_duplicate_raises_username_taken(
        self, repository: PostgresUserRepository
    ) -> None:
        await repository.create("alice", "h", "Alice")

        with pytest.raises(UsernameTaken):
            await repository.create("alice", "h", "Alice again")

    @pytest.mark.asyncio
    async def test_concurrent_creates_exactly_one_succeeds(
        self, repository: PostgresUserRepository
    ) -> None:
        """The primary key settles races the count check cannot."""
        results = await asyncio.gather(
            *(repository.create("target", "h", "T") for _ in range(5)),
            return_exceptions=True,
        )

        assert sum(not isinstance(r, BaseException) for r in results) == 1
        assert all(isinstance(r, UsernameTaken) for r in results if isinstance(r, BaseException))
        assert await repository.count("target") == 1


class TestQueries:
    """Tests for count, find_all, find_one."""

    @pytest.mark.asyncio
    async def test_count(self, repository: PostgresUserRepository) -> None:
        assert await repository.count("alice") == 0
        await repository.create("alice", "h", "Alice")
        assert await repository.count("alice") == 1

    @pytest.mark.asyncio
    async def test_find_all_returns_every_user(
        self, repository: PostgresUserRepository, pool: AsyncConnectionPool
    ) -> None:
        for username, points in [("low", 1), ("high", 9), ("mid", 5)]:
            await repository.create(username, "h", username)
            await set_points(pool, username, points, {})

        users = await repository.find_all()

        assert {user.username: user.points for user in users} == {"low": 1, "high": 9, "mid": 5}

    @pytest.mark.asyncio
    async def test_find_one_reads_picks(
        self, repository: PostgresUserRepository, pool: AsyncConnectionPool
    ) -> None:
        await repository.create("alice", "h", "Alice")
        await set_points(pool, "alice", 3, {"matchup0": "New York (NFC)"})

        user = await repository.find_one("alice")

        assert user is not None
        assert user.points == 3
        assert user.picks == {"matchup0": "New York (NFC)"}

    @pytest.mark.asyncio
    async def test_find_one_missing(self, repository: PostgresUserRepository) -> None:
        assert await repository.find_one("nobody") is None


class TestRemove:
    """Tests for remove and ping."""

    @pytest.mark.asyncio
    async def test_remove_one_and_all(self, repository: PostgresUserRepository) -> None:
        await repository.create("alice", "h", "Alice")
        await repository.create("bob", "h", "Bob")

        assert await repository.remove("alice") == 1
        assert await repository.remove() == 1
        assert await repository.find_all() == []

    @pytest.mark.asyncio
    async def test_ping(self, repository: PostgresUserRepository) -> None:
        await repository.ping()
