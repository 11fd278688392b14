"""HTTP boundary exposing the query pipeline over FastAPI."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import anyio
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from . import envelope
from .config import ServiceConfig
from .executor import execute
from .storage import InMemoryUserStore, UserStore
from .web import render_console

logger = logging.getLogger("userql.service")

GRAPHQL_PATH = "/graphql"
HEALTH_PATH = "/health"


class GraphQLRequest(BaseModel):
    query: str
    variables: Optional[Dict[str, Any]] = Field(default=None)
    operation_name: Optional[str] = Field(default=None, alias="operationName")


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=envelope.failure(message),
    )


def _storage_status(store: UserStore) -> str:
    try:
        store.ping()
    except Exception as exc:
        logger.warning("Storage health check failed: %s", exc)
        return f"error: {exc}"
    return "connected"


def create_app(
    *,
    store: UserStore | None = None,
    config: ServiceConfig | None = None,
) -> FastAPI:
    """Create the FastAPI application serving ``/graphql`` and ``/health``."""

    if config is None:
        config = ServiceConfig(storage="memory")
    if store is None:
        store = InMemoryUserStore((seed.name, seed.email) for seed in config.seed_users)

    app = FastAPI(
        title="userql",
        description="Minimal GraphQL-style API for user records",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.state.store = store
    app.state.config = config

    @app.post(GRAPHQL_PATH)
    async def graphql(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
        except ValueError as exc:
            logger.warning("Rejected request body that is not valid JSON: %s", exc)
            return _bad_request("Request body must be valid JSON")

        try:
            parsed = GraphQLRequest.model_validate(payload)
        except ValueError as exc:
            logger.warning("Rejected malformed GraphQL request: %s", exc)
            return _bad_request("Request body must include a 'query' string")

        result = await anyio.to_thread.run_sync(execute, parsed.query, parsed.variables or {}, store)

        created = result.get("data", {}).get("createUser")
        if created:
            logger.info("Created user %s <%s>", created["id"], created["email"])

        return JSONResponse(content=result)

    @app.get(GRAPHQL_PATH, response_class=HTMLResponse)
    async def console() -> HTMLResponse:
        return HTMLResponse(render_console(GRAPHQL_PATH))

    @app.get(HEALTH_PATH)
    async def healthcheck() -> Dict[str, str]:
        database = await anyio.to_thread.run_sync(_storage_status, store)
        return {
            "status": "ok",
            "message": f"userql API is running with {config.storage} storage",
            "database": database,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/")
    async def index() -> Dict[str, Any]:
        return {
            "message": "Welcome to the userql GraphQL API",
            "endpoints": {"graphql": GRAPHQL_PATH, "health": HEALTH_PATH},
        }

    return app


__all__ = ["GraphQLRequest", "create_app"]
