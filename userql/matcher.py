"""Recognise the supported operations inside an operation body.

There is no grammar here: each operation is detected by a substring check
and its arguments are pulled out with regular expressions. Operation names
overlap (``user`` is a prefix of ``users`` and ``createUser``), so the rules
are evaluated in a fixed order and the first hit wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .errors import MissingArgumentError, UnsupportedOperationError

_ID_LITERAL_PATTERN = re.compile(r'user\(id:\s*"([^"]+)"\s*\)')
_ID_VARIABLE_PATTERN = re.compile(r"user\(id:\s*\$(\w+)\s*\)")
_NAME_LITERAL_PATTERN = re.compile(r'name:\s*"([^"]+)"')
_EMAIL_LITERAL_PATTERN = re.compile(r'email:\s*"([^"]+)"')


@dataclass(frozen=True)
class MatchedOperation:
    name: str
    args: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class OperationRule:
    """A detection predicate paired with the argument extractor for one operation."""

    name: str
    predicate: Callable[[str], bool]
    extract: Callable[[str, Mapping[str, Any]], Dict[str, str]]


def _string_variable(variables: Mapping[str, Any], key: str) -> Optional[str]:
    value = variables.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def _id_variable(variables: Mapping[str, Any], key: str) -> Optional[str]:
    value = variables.get(key)
    # integer ids are accepted as their decimal text; bools are not ids
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _string_variable(variables, key)


def _no_arguments(_body: str, _variables: Mapping[str, Any]) -> Dict[str, str]:
    return {}


def _extract_user_id(body: str, variables: Mapping[str, Any]) -> Dict[str, str]:
    literal = _ID_LITERAL_PATTERN.search(body)
    if literal:
        return {"id": literal.group(1)}

    reference = _ID_VARIABLE_PATTERN.search(body)
    if reference:
        value = _id_variable(variables, reference.group(1))
        if value is not None:
            return {"id": value}

    raise MissingArgumentError("Invalid ID")


def _extract_create_arguments(body: str, variables: Mapping[str, Any]) -> Dict[str, str]:
    name = _string_variable(variables, "name")
    email = _string_variable(variables, "email")
    if name is not None and email is not None:
        return {"name": name, "email": email}

    name_match = _NAME_LITERAL_PATTERN.search(body)
    email_match = _EMAIL_LITERAL_PATTERN.search(body)
    if name_match and email_match:
        return {"name": name_match.group(1), "email": email_match.group(1)}

    raise MissingArgumentError("Missing args")


RULES: Tuple[OperationRule, ...] = (
    OperationRule("hello", lambda body: "hello" in body, _no_arguments),
    OperationRule(
        "users",
        lambda body: "users" in body and "user(" not in body,
        _no_arguments,
    ),
    OperationRule("user", lambda body: "user(id:" in body, _extract_user_id),
    OperationRule("createUser", lambda body: "createUser" in body, _extract_create_arguments),
)


def match(body: str, variables: Optional[Mapping[str, Any]] = None) -> MatchedOperation:
    """Return the first operation whose rule matches *body*.

    Raises :class:`MissingArgumentError` when an operation is recognised but
    its arguments cannot be extracted, and :class:`UnsupportedOperationError`
    when no rule applies.
    """

    resolved_variables: Mapping[str, Any] = variables or {}
    for rule in RULES:
        if rule.predicate(body):
            return MatchedOperation(name=rule.name, args=rule.extract(body, resolved_variables))
    raise UnsupportedOperationError()


__all__ = ["MatchedOperation", "OperationRule", "RULES", "match"]
