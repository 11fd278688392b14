"""Error types surfaced to clients as ``errors`` envelopes."""
from __future__ import annotations

from typing import Optional


class QueryError(RuntimeError):
    """Base class for failures reported back to the caller."""

    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidQueryError(QueryError):
    """Raised when no operation body can be located in the query text."""

    default_message = "Invalid query"


class UnsupportedOperationError(QueryError):
    """Raised when the body names none of the known operations."""

    default_message = "Query not supported"


class MissingArgumentError(QueryError):
    """Raised when a required argument is absent from variables and literals."""

    default_message = "Missing args"


class DuplicateEmailError(QueryError):
    """Raised when creating a user whose email is already registered."""

    default_message = "Email already in use"


class StorageError(QueryError):
    """Wraps an unexpected failure from the storage collaborator."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Database error: {detail}")
        self.detail = detail


__all__ = [
    "QueryError",
    "InvalidQueryError",
    "UnsupportedOperationError",
    "MissingArgumentError",
    "DuplicateEmailError",
    "StorageError",
]
