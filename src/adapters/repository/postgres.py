"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Duplicate emails are rejected by the UNIQUE constraint on users.email
(see migrations/). A UniqueViolation raised by the INSERT is translated
to EmailInUse; every other driver error becomes PersistenceError so store
outages are never reported to callers as "email in use".
"""

import logging
from pathlib import Path

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import EmailInUse, PersistenceError
from src.domain.models import User

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, username, email, password_hash, activation_token"


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        activation_token: str,
    ) -> User:
        """
        Insert a new user row and return it with its generated id.

        Raises:
            EmailInUse: If the email UNIQUE constraint rejects the row
            PersistenceError: For any other database failure
        """
        sql = f"""
            INSERT INTO users (username, email, password_hash, activation_token)
            VALUES (%s, %s, %s, %s)
            RETURNING {_USER_COLUMNS}
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (username, email, password_hash, activation_token))
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation:
            raise EmailInUse(email) from None
        except psycopg.Error as e:
            logger.error(f"User insert failed: {e.__class__.__name__}")
            raise PersistenceError("Could not store user") from e

        return _row_to_user(row)

    def find_by_email(self, email: str) -> User | None:
        """Fetch the user with exactly this email, or None."""
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s"

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            logger.error(f"User lookup failed: {e.__class__.__name__}")
            raise PersistenceError("Could not query users") from e

        return _row_to_user(row) if row is not None else None

    def truncate(self) -> None:
        """Remove all users and reset the id sequence."""
        try:
            with self._pool.connection() as conn:
                conn.execute("TRUNCATE TABLE users RESTART IDENTITY")
                conn.commit()
        except psycopg.Error as e:
            raise PersistenceError("Could not truncate users") from e


def _row_to_user(row: tuple) -> User:
    return User(
        id=row[0],
        username=row[1],
        email=row[2],
        password_hash=row[3],
        activation_token=row[4],
    )


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
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

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
