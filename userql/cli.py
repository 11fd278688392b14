"""Command-line interface for the userql service."""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Sequence

from .config import STORAGE_KINDS, ServiceConfig, load_config_from_env
from .database import Database, resolve_database_path
from .envelope import is_error

logger = logging.getLogger("userql.cli")

KNOWN_COMMANDS = {"serve", "init-db", "query", "users"}


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="userql GraphQL-style user API")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    def add_storage_options(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--storage",
            choices=STORAGE_KINDS,
            default=None,
            help="Storage backend (default: USERQL_STORAGE or sqlite)",
        )
        subparser.add_argument(
            "--db",
            dest="db_path",
            default=None,
            help="Path to the SQLite database (defaults to USERQL_DB_PATH or data/userql.sqlite3)",
        )

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address for the API")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8787,
        help="Port for the HTTP API (default: 8787)",
    )
    add_storage_options(serve_parser)

    init_parser = subparsers.add_parser("init-db", help="Initialise the SQLite user database")
    init_parser.add_argument("--db", dest="db_path", default=None, help="Path to the SQLite database")

    query_parser = subparsers.add_parser("query", help="Execute a single query and print the response")
    query_parser.add_argument("query", help="Query text, e.g. 'query { users { id name } }'")
    query_parser.add_argument(
        "--variables",
        default=None,
        help="JSON object with variables for the query",
    )
    query_parser.add_argument(
        "--service-url",
        default=None,
        help="Send the query to a running service instead of executing it locally",
    )
    add_storage_options(query_parser)

    users_parser = subparsers.add_parser("users", help="List stored users")
    users_parser.add_argument("--db", dest="db_path", default=None, help="Path to the SQLite database")

    args_list = list(argv) if argv is not None else sys.argv[1:]

    if not args_list:
        args_list = ["serve"]
    else:
        first = args_list[0]
        if first in ("-h", "--help"):
            return parser.parse_args(args_list)
        if first not in KNOWN_COMMANDS:
            if any(flag in args_list for flag in ("-h", "--help")):
                return parser.parse_args(args_list)
            args_list = ["serve", *args_list]

    return parser.parse_args(args_list)


def _effective_config(args: argparse.Namespace) -> ServiceConfig:
    config = load_config_from_env()
    storage = getattr(args, "storage", None)
    if storage:
        config = replace(config, storage=storage)
    db_path = getattr(args, "db_path", None)
    if db_path:
        config = replace(config, database_path=Path(db_path).expanduser().resolve(strict=False))
    return config


def _open_database(db_path: str | None) -> Database:
    path = resolve_database_path(db_path or os.getenv("USERQL_DB_PATH"))
    database = Database(path)
    database.initialize()
    logger.info("Database initialised at %s", path)
    return database


def _parse_variables(raw: str | None) -> Dict[str, Any]:
    if not raw:
        return {}
    try:
        variables = json.loads(raw)
    except ValueError as exc:
        raise SystemExit(f"--variables must be valid JSON: {exc}") from exc
    if not isinstance(variables, dict):
        raise SystemExit("--variables must be a JSON object")
    return variables


def _serve(*, config: ServiceConfig, host: str, port: int) -> None:
    from .application import create_application
    import uvicorn

    logger.info("Starting userql API on http://%s:%s (%s storage)", host, port, config.storage)

    app = create_application(config=config)
    uvicorn.run(app, host=host, port=port, log_level="info")


def _run_query(args: argparse.Namespace) -> int:
    variables = _parse_variables(args.variables)

    if args.service_url:
        from .client import GraphQLClient, GraphQLClientError

        client = GraphQLClient(args.service_url)
        try:
            result = client.execute(args.query, variables)
        except GraphQLClientError as exc:
            print(f"Failed to contact userql service: {exc}", file=sys.stderr)
            return 1
    else:
        from .application import build_store
        from .executor import execute

        store = build_store(_effective_config(args))
        result = execute(args.query, variables, store)

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 1 if is_error(result) else 0


def _list_users(database: Database) -> None:
    users = database.list_all()
    if not users:
        print("No users are currently registered.")
        return

    print(f"{len(users)} user(s) found:")
    print(f"{'ID':>4}  {'Name':<24}  {'Email':<32}  Created")
    print("-" * 80)
    for user in users:
        created = user.created_at.strftime("%Y-%m-%d %H:%M:%S %Z")
        print(f"{user.id:>4}  {user.name:<24}  {user.email:<32}  {created}")


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    args = _parse_args(argv)

    if args.command == "serve":
        _serve(config=_effective_config(args), host=args.host, port=args.port)
    elif args.command == "init-db":
        _open_database(args.db_path)
        print("Database initialisation complete.")
    elif args.command == "query":
        return _run_query(args)
    elif args.command == "users":
        _list_users(_open_database(args.db_path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
