"""SQLite-backed persistence for user records."""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import DuplicateEmailError
from .models import User


def _ensure_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_database_path(env_value: Optional[str]) -> Path:
    """Resolve the on-disk path for the application database."""

    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    base_dir = Path(__file__).resolve().parent.parent / "data"
    return (base_dir / "userql.sqlite3").resolve(strict=False)


def _current_timestamp() -> datetime:
    return datetime.now(timezone.utc)


def _serialize_datetime(value: datetime) -> str:
    return value.isoformat()


def _parse_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value)


class Database:
    """User store persisted in a single SQLite file.

    The ``email`` column carries a ``UNIQUE`` constraint, so concurrent
    inserts for the same address cannot both succeed even though the
    ``createUser`` resolver checks for an existing record first.
    """

    def __init__(self, path: Path) -> None:
        _ensure_directory(path)
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create the required tables if they do not already exist."""

        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    email TEXT NOT NULL UNIQUE,
                    created_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_users_created_at ON users(created_at);
                """
            )

    # ------------------------------------------------------------------
    # User store
    # ------------------------------------------------------------------
    def list_all(self) -> List[User]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, name, email, created_at FROM users ORDER BY created_at DESC, id DESC"
            ).fetchall()
        return [self._row_to_user(row) for row in rows]

    def get_by_id(self, user_id: str) -> Optional[User]:
        try:
            row_id = int(user_id)
        except (TypeError, ValueError):
            return None

        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, name, email, created_at FROM users WHERE id = ?",
                (row_id,),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def find_by_email(self, email: str) -> Optional[User]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, name, email, created_at FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def insert(self, name: str, email: str) -> User:
        """Insert a new user and return it with its assigned id."""

        created_at = _current_timestamp()
        with self._connect() as conn:
            try:
                cursor = conn.execute(
                    "INSERT INTO users (name, email, created_at) VALUES (?, ?, ?)",
                    (name, email, _serialize_datetime(created_at)),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateEmailError() from exc
            user_id = cursor.lastrowid

        return User(id=str(user_id), name=name, email=email, created_at=created_at)

    def count(self) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) AS total FROM users").fetchone()
        return int(row["total"])

    def ping(self) -> None:
        with self._connect() as conn:
            conn.execute("SELECT 1").fetchone()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=str(row["id"]),
            name=str(row["name"]),
            email=str(row["email"]),
            created_at=_parse_datetime(str(row["created_at"])),
        )


__all__ = ["Database", "resolve_database_path"]
