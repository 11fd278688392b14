"""Build the ``{"data": ...}`` / ``{"errors": [...]}`` response envelopes."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .errors import QueryError
from .models import User

Envelope = Dict[str, Any]

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _to_wire(value: Any) -> Any:
    if isinstance(value, User):
        return value.to_payload()
    if isinstance(value, (list, tuple)):
        return [_to_wire(item) for item in value]
    return value


def success(operation: str, value: Any) -> Envelope:
    return {"data": {operation: _to_wire(value)}}


def failure(*messages: str) -> Envelope:
    if not messages:
        messages = (INTERNAL_ERROR_MESSAGE,)
    errors: List[Dict[str, str]] = [{"message": str(message)} for message in messages]
    return {"errors": errors}


def from_error(exc: QueryError) -> Envelope:
    return failure(exc.message)


def is_error(envelope: Envelope) -> bool:
    return "errors" in envelope


def error_messages(envelope: Envelope) -> Sequence[str]:
    return [entry.get("message", "") for entry in envelope.get("errors", [])]


__all__ = [
    "Envelope",
    "INTERNAL_ERROR_MESSAGE",
    "success",
    "failure",
    "from_error",
    "is_error",
    "error_messages",
]
