"""Storage collaborator interface and the volatile in-memory implementation."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from .models import User


@runtime_checkable
class UserStore(Protocol):
    """Persistence operations the query pipeline relies on."""

    def list_all(self) -> List[User]:
        """Return every user, newest first."""

    def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    def find_by_email(self, email: str) -> Optional[User]:
        ...

    def insert(self, name: str, email: str) -> User:
        """Persist a new user, assigning its ``id`` and ``created_at``."""

    def ping(self) -> None:
        """Raise if the backing store cannot be reached."""


def _current_timestamp() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryUserStore:
    """Process-local user store backed by a plain list.

    Identifiers come from a sequential counter starting at ``1``. The store
    does not lock around the email check performed by ``createUser``, so two
    concurrent creates for the same address may both succeed. Use the SQLite
    store when uniqueness must hold under concurrency.
    """

    def __init__(self, seed: Iterable[Tuple[str, str]] = ()) -> None:
        self._users: List[Tuple[int, User]] = []
        self._ids = itertools.count(1)
        for name, email in seed:
            self.insert(name, email)

    def list_all(self) -> List[User]:
        ordered = sorted(
            self._users,
            key=lambda entry: (entry[1].created_at, entry[0]),
            reverse=True,
        )
        return [user for _, user in ordered]

    def get_by_id(self, user_id: str) -> Optional[User]:
        for _, user in self._users:
            if user.id == user_id:
                return user
        return None

    def find_by_email(self, email: str) -> Optional[User]:
        for _, user in self._users:
            if user.email == email:
                return user
        return None

    def insert(self, name: str, email: str) -> User:
        sequence = next(self._ids)
        user = User(id=str(sequence), name=name, email=email, created_at=_current_timestamp())
        self._users.append((sequence, user))
        return user

    def ping(self) -> None:
        return None

    def __len__(self) -> int:
        return len(self._users)


__all__ = ["UserStore", "InMemoryUserStore"]
