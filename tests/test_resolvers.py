import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userql.errors import DuplicateEmailError  # noqa: E402
from userql.resolvers import GREETING, RESOLVERS, create_user, hello, user, users  # noqa: E402
from userql.storage import InMemoryUserStore  # noqa: E402


class ExplodingStore(InMemoryUserStore):
    def list_all(self):
        raise RuntimeError("disk I/O error")

    def get_by_id(self, user_id):
        raise RuntimeError("connection reset")

    def find_by_email(self, email):
        raise RuntimeError("no such table: users")


class UniqueIndexStore(InMemoryUserStore):
    """Behaves like a store that only enforces uniqueness on insert."""

    def find_by_email(self, email):
        return None

    def insert(self, name, email):
        if any(existing.email == email for existing in self.list_all()):
            raise DuplicateEmailError()
        return super().insert(name, email)


def test_registry_maps_every_operation() -> None:
    assert set(RESOLVERS) == {"hello", "users", "user", "createUser"}


def test_hello_returns_fixed_greeting_without_touching_store() -> None:
    assert hello(ExplodingStore()) == {"data": {"hello": GREETING}}


def test_users_returns_newest_first() -> None:
    store = InMemoryUserStore([("First", "first@example.com"), ("Second", "second@example.com")])
    result = users(store)
    names = [entry["name"] for entry in result["data"]["users"]]
    assert names == ["Second", "First"]


def test_users_on_empty_store_returns_empty_list() -> None:
    assert users(InMemoryUserStore()) == {"data": {"users": []}}


def test_user_returns_record_or_null() -> None:
    store = InMemoryUserStore([("Ada", "ada@example.com")])

    found = user(store, id="1")
    assert found["data"]["user"]["email"] == "ada@example.com"
    assert set(found["data"]["user"]) == {"id", "name", "email", "createdAt"}

    assert user(store, id="999") == {"data": {"user": None}}


def test_create_user_inserts_and_returns_record() -> None:
    store = InMemoryUserStore()
    result = create_user(store, name="X", email="x@y.com")

    created = result["data"]["createUser"]
    assert created["id"] == "1"
    assert created["name"] == "X"
    assert created["email"] == "x@y.com"
    assert created["createdAt"]
    assert len(store) == 1


def test_create_user_rejects_duplicate_email_without_insert() -> None:
    store = InMemoryUserStore([("Ada", "ada@example.com")])
    result = create_user(store, name="Other", email="ada@example.com")

    assert result == {"errors": [{"message": "Email already in use"}]}
    assert len(store) == 1


def test_create_user_reports_duplicate_raised_by_store() -> None:
    store = UniqueIndexStore([("Ada", "ada@example.com")])
    result = create_user(store, name="Other", email="ada@example.com")
    assert result == {"errors": [{"message": "Email already in use"}]}


def test_collaborator_faults_become_database_errors() -> None:
    store = ExplodingStore()

    assert users(store) == {"errors": [{"message": "Database error: disk I/O error"}]}
    assert user(store, id="1") == {"errors": [{"message": "Database error: connection reset"}]}
    assert create_user(store, name="X", email="x@y.com") == {
        "errors": [{"message": "Database error: no such table: users"}]
    }
