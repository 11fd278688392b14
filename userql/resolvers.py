"""Resolvers for the four supported operations."""

from __future__ import annotations

import functools
from typing import Any, Callable, Dict, List, Optional

from .envelope import Envelope, from_error, success
from .errors import DuplicateEmailError, QueryError, StorageError
from .models import User
from .storage import UserStore

GREETING = "Hello from the userql GraphQL API!"

Resolver = Callable[..., Envelope]


def _enveloped(operation: str) -> Callable[[Callable[..., Any]], Resolver]:
    """Wrap a resolver so that it always returns an envelope.

    Errors raised on purpose (:class:`QueryError`) keep their message; any
    other exception comes from the storage collaborator and is reported as a
    database error.
    """

    def decorator(func: Callable[..., Any]) -> Resolver:
        @functools.wraps(func)
        def wrapper(store: UserStore, **args: str) -> Envelope:
            try:
                value = func(store, **args)
            except QueryError as exc:
                return from_error(exc)
            except Exception as exc:
                return from_error(StorageError(str(exc)))
            return success(operation, value)

        return wrapper

    return decorator


@_enveloped("hello")
def hello(_store: UserStore) -> str:
    return GREETING


@_enveloped("users")
def users(store: UserStore) -> List[User]:
    return list(store.list_all())


@_enveloped("user")
def user(store: UserStore, id: str) -> Optional[User]:
    return store.get_by_id(id)


@_enveloped("createUser")
def create_user(store: UserStore, name: str, email: str) -> User:
    if store.find_by_email(email) is not None:
        raise DuplicateEmailError()
    return store.insert(name, email)


RESOLVERS: Dict[str, Resolver] = {
    "hello": hello,
    "users": users,
    "user": user,
    "createUser": create_user,
}


__all__ = ["GREETING", "RESOLVERS", "hello", "users", "user", "create_user"]
