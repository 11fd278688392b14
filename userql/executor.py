"""Entry point that runs a query string through the full pipeline."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from . import envelope
from .errors import InvalidQueryError, QueryError
from .matcher import match
from .query import classify
from .resolvers import RESOLVERS
from .storage import UserStore

logger = logging.getLogger("userql.executor")


def execute(
    query_text: str,
    variables: Optional[Mapping[str, Any]],
    store: UserStore,
) -> envelope.Envelope:
    """Classify, match and resolve *query_text* against *store*.

    Always returns exactly one envelope: the first failure stops processing
    and is reported in ``errors``. Faults nobody anticipated are logged and
    reported with a generic message.
    """

    try:
        request = classify(query_text)
        if request is None:
            raise InvalidQueryError()

        operation = match(request.body, variables or {})
        logger.debug("Resolving %s operation %s", request.kind.value, operation.name)
        return RESOLVERS[operation.name](store, **operation.args)
    except QueryError as exc:
        return envelope.from_error(exc)
    except Exception:
        logger.exception("Unexpected failure while executing query")
        return envelope.failure(envelope.INTERNAL_ERROR_MESSAGE)


__all__ = ["execute"]
