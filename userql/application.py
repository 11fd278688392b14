"""Application factory wiring configuration, storage and the HTTP service."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from .config import ServiceConfig, load_config_from_env
from .database import Database, resolve_database_path
from .service import create_app
from .storage import InMemoryUserStore, UserStore

logger = logging.getLogger("userql.application")


def build_store(config: ServiceConfig) -> UserStore:
    """Instantiate the storage collaborator selected by *config*."""

    if config.storage == "memory":
        if config.seed_users:
            logger.info("Seeding in-memory store with %d user(s)", len(config.seed_users))
        return InMemoryUserStore((seed.name, seed.email) for seed in config.seed_users)

    db_path = config.database_path or resolve_database_path(None)
    database = Database(db_path)
    database.initialize()
    logger.info("Using SQLite user store at %s", db_path)
    return database


def create_application(*, config: Optional[ServiceConfig] = None) -> FastAPI:
    """Create the ASGI application from ``USERQL_*`` environment settings."""

    if config is None:
        config = load_config_from_env()
    store = build_store(config)
    return create_app(store=store, config=config)


__all__ = ["build_store", "create_application"]
