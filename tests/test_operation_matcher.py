import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userql.errors import MissingArgumentError, UnsupportedOperationError  # noqa: E402
from userql.matcher import RULES, match  # noqa: E402


def test_rules_are_evaluated_in_documented_order() -> None:
    assert [rule.name for rule in RULES] == ["hello", "users", "user", "createUser"]


def test_hello_matches_without_arguments() -> None:
    operation = match("hello", {})
    assert operation.name == "hello"
    assert operation.args == {}


def test_users_matches_plural_list() -> None:
    operation = match("users { id name email createdAt }", {})
    assert operation.name == "users"


def test_single_user_selector_excludes_list_even_when_users_present() -> None:
    operation = match('user(id: "7") { id } users', {})
    assert operation.name == "user"
    assert operation.args == {"id": "7"}


def test_user_by_id_extracts_quoted_literal() -> None:
    operation = match('user(id: "42") { id name }', {})
    assert operation.name == "user"
    assert operation.args == {"id": "42"}


def test_user_by_id_resolves_variable_reference() -> None:
    operation = match("user(id: $userId) { id }", {"userId": "5"})
    assert operation.args == {"id": "5"}


def test_user_by_id_accepts_integer_variable() -> None:
    operation = match("user(id: $id) { id }", {"id": 1})
    assert operation.args == {"id": "1"}

    with pytest.raises(MissingArgumentError):
        match("user(id: $id) { id }", {"id": True})


def test_user_by_id_without_extractable_value_is_invalid_id() -> None:
    with pytest.raises(MissingArgumentError) as excinfo:
        match("user(id: 42) { id }", {})
    assert str(excinfo.value) == "Invalid ID"

    with pytest.raises(MissingArgumentError):
        match('user(id: "") { id }', {})

    with pytest.raises(MissingArgumentError):
        match("user(id: $missing) { id }", {})


def test_create_user_extracts_inline_literals() -> None:
    operation = match('createUser(name: "X", email: "x@y.com") { id }', {})
    assert operation.name == "createUser"
    assert operation.args == {"name": "X", "email": "x@y.com"}


def test_create_user_prefers_variables_over_inline_literals() -> None:
    operation = match(
        'createUser(name: "B", email: "b@x.com") { id }',
        {"name": "A", "email": "a@x.com"},
    )
    assert operation.args == {"name": "A", "email": "a@x.com"}


def test_create_user_ignores_partial_variables() -> None:
    operation = match(
        'createUser(name: "B", email: "b@x.com") { id }',
        {"name": "A"},
    )
    assert operation.args == {"name": "B", "email": "b@x.com"}


def test_create_user_without_arguments_is_missing_args() -> None:
    with pytest.raises(MissingArgumentError) as excinfo:
        match("createUser(name: $name, email: $email) { id }", {})
    assert str(excinfo.value) == "Missing args"

    with pytest.raises(MissingArgumentError):
        match('createUser(name: "only-name") { id }', {"email": 7})


def test_unknown_operation_is_unsupported() -> None:
    with pytest.raises(UnsupportedOperationError) as excinfo:
        match("posts { id title }", {})
    assert str(excinfo.value) == "Query not supported"


def test_empty_body_is_unsupported() -> None:
    with pytest.raises(UnsupportedOperationError):
        match("", None)
