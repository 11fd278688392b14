import argparse
import json
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userql.database import Database, resolve_database_path
from userql.envelope import error_messages, is_error
from userql.executor import execute

CREATE_USER_MUTATION = """
mutation CreateUser($name: String!, $email: String!) {
  createUser(name: $name, email: $email) { id name email createdAt }
}
"""


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a userql user record")
    parser.add_argument("name", help="Display name for the user")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument(
        "--db",
        dest="db_path",
        default=None,
        help="Path to the SQLite database (defaults to USERQL_DB_PATH or data/userql.sqlite3)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    name = args.name.strip()
    email = args.email.strip()
    if not name or not email:
        print("Error: name and email must not be empty.", file=sys.stderr)
        return 1

    db_env = args.db_path or os.getenv("USERQL_DB_PATH")
    db_path = resolve_database_path(db_env)

    database = Database(db_path)
    database.initialize()

    result = execute(CREATE_USER_MUTATION, {"name": name, "email": email}, database)
    if is_error(result):
        for message in error_messages(result):
            print(f"Error: {message}", file=sys.stderr)
        return 1

    user = result["data"]["createUser"]
    print(f"Created user #{user['id']}: {user['name']} <{user['email']}>")
    print(json.dumps(user, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
