"""
PostgreSQL repository adapter - Implements UserRepository protocol.

Uses psycopg3's async connection pool with raw, parameterized SQL.

Uniqueness of usernames is enforced by the PRIMARY KEY on ``users.username``.
create() translates the resulting unique violation into UsernameTaken, which
closes the window between the registrar's count and its insert.
"""

import logging
from pathlib import Path

from psycopg import errors
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from pickem.domain.exceptions import UsernameTaken
from pickem.domain.ports import User

logger = logging.getLogger(__name__)

_USER_COLUMNS = "username, password_hash, name, points, picks"


def _row_to_user(row: tuple) -> User:
    username, password_hash, name, points, picks = row
    return User(
        username=username,
        password_hash=password_hash,
        name=name,
        points=points,
        picks=dict(picks or {}),
    )


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 AsyncConnectionPool for database connections
        """
        self._pool = pool

    async def create(self, username: str, password_hash: str, name: str) -> User:
        """
        Insert a new user with zero points and no picks.

        Raises:
            UsernameTaken: If the username already exists
        """
        sql = f"""
            INSERT INTO users (username, password_hash, name, points, picks)
            VALUES (%s, %s, %s, 0, %s)
            RETURNING {_USER_COLUMNS}
        """

        try:
            async with self._pool.connection() as conn, conn.cursor() as cursor:
                await cursor.execute(sql, (username, password_hash, name, Jsonb({})))
                row = await cursor.fetchone()
                await conn.commit()
        except errors.UniqueViolation:
            raise UsernameTaken() from None
        return _row_to_user(row)

    async def count(self, username: str) -> int:
        """Count users holding ``username``."""
        async with self._pool.connection() as conn, conn.cursor() as cursor:
            await cursor.execute("SELECT COUNT(*) FROM users WHERE username = %s", (username,))
            row = await cursor.fetchone()
        return row[0]

    async def find_all(self) -> list[User]:
        """Return all users in no particular order."""
        sql = f"SELECT {_USER_COLUMNS} FROM users"
        async with self._pool.connection() as conn, conn.cursor() as cursor:
            await cursor.execute(sql)
            rows = await cursor.fetchall()
        return [_row_to_user(row) for row in rows]

    async def find_one(self, username: str) -> User | None:
        """Return the user with ``username`` or None."""
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE username = %s"
        async with self._pool.connection() as conn, conn.cursor() as cursor:
            await cursor.execute(sql, (username,))
            row = await cursor.fetchone()
        return _row_to_user(row) if row is not None else None

    async def remove(self, username: str | None = None) -> int:
        """Delete one user, or all of them when ``username`` is None."""
        async with self._pool.connection() as conn, conn.cursor() as cursor:
            if username is None:
                await cursor.execute("DELETE FROM users")
            else:
                await cursor.execute("DELETE FROM users WHERE username = %s", (username,))
            await conn.commit()
            return cursor.rowcount

    async def ping(self) -> None:
        """Run a trivial query to prove the database is reachable."""
        async with self._pool.connection() as conn:
            await conn.execute("SELECT 1")


async def run_migrations(pool: AsyncConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 AsyncConnectionPool instance
    """
    # Structure: pickem/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            async with pool.connection() as conn:
                await conn.execute(sql_content)
                await conn.commit()

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
