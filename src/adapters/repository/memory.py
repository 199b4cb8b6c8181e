"""
In-memory repository adapter - Implements UserRepository protocol.

Process-local store for development and tests. A single lock guards the
email index so the uniqueness rule holds under concurrent requests, the
same guarantee the PostgreSQL UNIQUE constraint gives.
"""

import itertools
import threading

from src.domain.exceptions import EmailInUse
from src.domain.models import User


class InMemoryUserRepository:
    """
    Implements UserRepository protocol with a dict keyed by email.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {}
        self._ids = itertools.count(1)

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        activation_token: str,
    ) -> User:
        with self._lock:
            if email in self._users:
                raise EmailInUse(email)
            user = User(
                id=next(self._ids),
                username=username,
                email=email,
                password_hash=password_hash,
                activation_token=activation_token,
            )
            self._users[email] = user
            return user

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            return self._users.get(email)

    def find_all(self) -> list[User]:
        """Return every stored user in creation order."""
        with self._lock:
            return sorted(self._users.values(), key=lambda u: u.id)

    def truncate(self) -> None:
        with self._lock:
            self._users.clear()
            self._ids = itertools.count(1)
