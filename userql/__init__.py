"""Minimal GraphQL-style query service for user records."""

from __future__ import annotations

from typing import Any

from .database import Database, resolve_database_path
from .executor import execute
from .storage import InMemoryUserStore, UserStore


def create_app(*args: Any, **kwargs: Any):
    """Factory function that returns the HTTP application."""

    from .service import create_app as _create_app

    return _create_app(*args, **kwargs)


def create_application(*args: Any, **kwargs: Any):
    """Factory function that builds the application from environment settings."""

    from .application import create_application as _create_application

    return _create_application(*args, **kwargs)


__all__ = [
    "Database",
    "InMemoryUserStore",
    "UserStore",
    "execute",
    "resolve_database_path",
    "create_app",
    "create_application",
]
