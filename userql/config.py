"""Configuration management for the user query service."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

STORAGE_KINDS = ("sqlite", "memory")


@dataclass(frozen=True)
class SeedUser:
    """A user inserted into the in-memory store at start-up."""

    name: str
    email: str

    @staticmethod
    def from_dict(data: Dict[str, object]) -> "SeedUser":
        missing = {"name", "email"} - data.keys()
        if missing:
            raise ValueError(f"Missing required seed user fields: {', '.join(sorted(missing))}")
        name = str(data["name"]).strip()
        email = str(data["email"]).strip()
        if not name or not email:
            raise ValueError("Seed users must have a non-empty name and email")
        return SeedUser(name=name, email=email)


@dataclass(frozen=True)
class ServiceConfig:
    """Runtime settings for the HTTP service and its storage backend."""

    storage: str = "sqlite"
    database_path: Optional[Path] = None
    cors_origins: Tuple[str, ...] = ("*",)
    seed_users: Tuple[SeedUser, ...] = ()

    @staticmethod
    def from_dict(data: Dict[str, object], base_path: Path | None = None) -> "ServiceConfig":
        """Create a :class:`ServiceConfig` from raw dictionary data."""

        storage = str(data.get("storage", "sqlite")).strip().lower()
        if storage not in STORAGE_KINDS:
            raise ValueError(
                f"Unsupported storage backend '{storage}'. Expected one of: {', '.join(STORAGE_KINDS)}"
            )

        database_path: Optional[Path] = None
        raw_path = data.get("database_path")
        if raw_path:
            expanded = Path(str(raw_path)).expanduser()
            if not expanded.is_absolute() and base_path is not None:
                expanded = base_path / expanded
            database_path = expanded.resolve(strict=False)

        raw_origins = data.get("cors_origins", ["*"])
        if isinstance(raw_origins, str):
            raw_origins = [raw_origins]
        if not isinstance(raw_origins, list):
            raise ValueError("cors_origins must be a string or a list of strings")
        origins = tuple(str(origin).strip() for origin in raw_origins if str(origin).strip())

        raw_seed = data.get("seed_users") or []
        if not isinstance(raw_seed, list):
            raise ValueError("seed_users must be a list of {name, email} mappings")
        seed_users = []
        for item in raw_seed:
            if not isinstance(item, dict):
                raise ValueError("seed_users must be a list of {name, email} mappings")
            seed_users.append(SeedUser.from_dict(item))

        return ServiceConfig(
            storage=storage,
            database_path=database_path,
            cors_origins=origins or ("*",),
            seed_users=tuple(seed_users),
        )


def load_service_config(config_path: Path) -> ServiceConfig:
    """Load service settings from a YAML file."""
    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise ValueError("Configuration file must contain a mapping at the top level")

    return ServiceConfig.from_dict(raw, base_path=config_path.parent)


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (Path(__file__).resolve().parent.parent / "config" / "userql.yaml").resolve(strict=False)
    return candidate


def load_config_from_env() -> ServiceConfig:
    """Build the effective configuration from ``USERQL_*`` environment variables.

    ``USERQL_CONFIG`` points at an optional YAML file. ``USERQL_STORAGE``,
    ``USERQL_DB_PATH`` and ``USERQL_CORS_ORIGINS`` override individual
    settings from that file.
    """

    config_path = resolve_config_path(os.getenv("USERQL_CONFIG"))
    config = load_service_config(config_path) if config_path.is_file() else ServiceConfig()

    storage = os.getenv("USERQL_STORAGE")
    if storage:
        normalized = storage.strip().lower()
        if normalized not in STORAGE_KINDS:
            raise ValueError(f"USERQL_STORAGE must be one of: {', '.join(STORAGE_KINDS)}")
        config = replace(config, storage=normalized)

    db_path = os.getenv("USERQL_DB_PATH")
    if db_path:
        config = replace(config, database_path=Path(db_path).expanduser().resolve(strict=False))

    origins = os.getenv("USERQL_CORS_ORIGINS")
    if origins:
        parsed = tuple(origin.strip() for origin in origins.split(",") if origin.strip())
        if parsed:
            config = replace(config, cors_origins=parsed)

    return config


__all__ = [
    "SeedUser",
    "ServiceConfig",
    "STORAGE_KINDS",
    "load_service_config",
    "load_config_from_env",
    "resolve_config_path",
]
