"""
Adversarial tests for concurrent registrations of the same email.

The uniqueness pre-check and the insert are separate steps, so concurrent
requests can both pass the check. The store's unique rule must decide:
exactly one account is created and every other request is reported as
"E-mail in use".
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import InMemoryUserRepository
from src.adapters.repository.postgres import PostgresUserRepository
from src.domain.exceptions import EmailInUse, ValidationFailed
from src.domain.messages import ErrorKey
from src.domain.models import RegistrationRequest
from src.domain.registration import RegistrationService
from src.domain.ports import UserRepository

# Apply adversarial marker to all tests in this module
pytestmark = pytest.mark.adversarial

NUM_ATTACKERS = 8


class GatedRepository:
    """
    Wraps a repository so every caller passes find_by_email before any insert.

    Forces the check-then-insert window open for all concurrent requests.
    """

    def __init__(self, inner: UserRepository, parties: int) -> None:
        self._inner = inner
        self._barrier = threading.Barrier(parties, timeout=10)

    def find_by_email(self, email: str):
        found = self._inner.find_by_email(email)
        self._barrier.wait()
        return found

    def create(self, **kwargs):
        return self._inner.create(**kwargs)

    def truncate(self) -> None:
        self._inner.truncate()


def run_concurrent_registrations(repository: UserRepository) -> list[str]:
    """Register the same email from NUM_ATTACKERS threads; return per-request outcomes."""
    service = RegistrationService(
        repository=GatedRepository(repository, NUM_ATTACKERS),
        notifier=Mock(),
        bcrypt_cost=4,
    )

    def attempt(i: int) -> str:
        request = RegistrationRequest(
            username=f"user{i:02d}", email="race@mail.com", password="passworD987654"
        )
        try:
            service.register(request)
        except ValidationFailed as e:
            assert e.result.errors == {"email": ErrorKey.EMAIL_IN_USE}
            return "in_use" if isinstance(e, EmailInUse) else "pre_check"
        return "created"

    with ThreadPoolExecutor(max_workers=NUM_ATTACKERS) as executor:
        return list(executor.map(attempt, range(NUM_ATTACKERS)))


class TestConcurrentRegistration:
    def test_in_memory_exactly_one_succeeds(self) -> None:
        repository = InMemoryUserRepository()

        outcomes = run_concurrent_registrations(repository)

        assert outcomes.count("created") == 1
        assert outcomes.count("in_use") == NUM_ATTACKERS - 1
        assert len(repository.find_all()) == 1

    @pytest.mark.postgres
    def test_postgres_exactly_one_succeeds(self, pg_pool: ConnectionPool, clean_users: None) -> None:
        outcomes = run_concurrent_registrations(PostgresUserRepository(pg_pool))

        assert outcomes.count("created") == 1
        assert outcomes.count("in_use") == NUM_ATTACKERS - 1
        with pg_pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT COUNT(*) FROM users WHERE email = %s", ("race@mail.com",))
            assert cursor.fetchone()[0] == 1

    def test_different_emails_do_not_interfere(self) -> None:
        repository = InMemoryUserRepository()
        service = RegistrationService(repository=repository, notifier=Mock(), bcrypt_cost=4)

        def attempt(i: int) -> None:
            service.register(
                RegistrationRequest(
                    username=f"user{i:02d}", email=f"user{i}@mail.com", password="passworD987654"
                )
            )

        with ThreadPoolExecutor(max_workers=NUM_ATTACKERS) as executor:
            list(executor.map(attempt, range(NUM_ATTACKERS)))

        assert len(repository.find_all()) == NUM_ATTACKERS
