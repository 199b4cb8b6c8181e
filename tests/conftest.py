"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Fast bcrypt cost for the whole session
- In-memory repository and test client setup
- PostgreSQL connection pool (tests skip when the database is unreachable)
"""

import os
from collections.abc import Generator

# Must be set before the first get_settings() call.
os.environ["BCRYPT_COST"] = "4"

import pytest
from fastapi.testclient import TestClient
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository import InMemoryUserRepository, run_migrations
from src.api.main import app
from src.config.settings import get_settings

get_settings.cache_clear()


@pytest.fixture
def memory_repository() -> InMemoryUserRepository:
    """Fresh in-memory repository for each test."""
    return InMemoryUserRepository()


@pytest.fixture
def client(memory_repository: InMemoryUserRepository) -> Generator[TestClient, None, None]:
    """
    Test client for the real application backed by the in-memory repository.

    The lifespan is not entered, so app.state is wired directly.
    """
    app.state.repository = memory_repository
    app.state.pool = None
    yield TestClient(app)
    app.state.notifier = None


@pytest.fixture(scope="session")
def pg_pool() -> Generator[ConnectionPool, None, None]:
    """Connection pool for PostgreSQL-backed tests; skips if the database is down."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=3)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL is not reachable")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_users(pg_pool: ConnectionPool) -> None:
    """Truncate the users table before a PostgreSQL-backed test."""
    with pg_pool.connection() as conn:
        conn.execute("TRUNCATE TABLE users RESTART IDENTITY")
        conn.commit()
