import argparse
import getpass
import os
import sys
from pathlib import Path

import anyio

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from usermgmt.database import Database, resolve_database_path
from usermgmt.errors import ValidationFailure
from usermgmt.models import UserView
from usermgmt.passwords import PasswordHasher
from usermgmt.users import UserService
from usermgmt.validation import validate_user_view


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a user account")
    parser.add_argument("first_name", help="Given name of the user")
    parser.add_argument("last_name", help="Family name of the user")
    parser.add_argument("email", help="Email address of the user")
    parser.add_argument(
        "--db",
        dest="db_path",
        default=None,
        help="Path to the SQLite database (defaults to USERMGMT_DB_PATH or data/users.sqlite3)",
    )
    return parser.parse_args()


def prompt_for_password() -> str:
    for _ in range(3):
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match. Try again.", file=sys.stderr)
            continue
        if not password.strip():
            print("Password must not be blank.", file=sys.stderr)
            continue
        return password
    raise SystemExit("Failed to set password after three attempts.")


def main() -> int:
    args = parse_args()

    try:
        view = validate_user_view(
            UserView(
                first_name=args.first_name.strip(),
                last_name=args.last_name.strip(),
                email=args.email.strip(),
                password=prompt_for_password(),
            )
        )
    except ValidationFailure as exc:
        for message in exc.errors:
            print(f"Error: {message}", file=sys.stderr)
        return 1

    db_env = args.db_path or os.getenv("USERMGMT_DB_PATH")
    database = Database(resolve_database_path(db_env))
    database.initialize()

    service = UserService(database, PasswordHasher())
    user = anyio.run(service.create, view)

    print(f"Created user #{user.id}: {user.first_name} {user.last_name} <{user.email}>")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
