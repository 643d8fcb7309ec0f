"""Create a login user: python -m dziennik.create_user <username>.

Invariants:
    - Usernames are unique; an existing username is never overwritten
    - Only the bcrypt hash is stored, never the plain password
    - The password is read from a prompt, or from stdin with --password-stdin
"""

import argparse
import getpass
import logging
import sys

from sqlalchemy import select
from sqlalchemy.orm import Session

from dziennik.config import Settings
from dziennik.infrastructure.database import create_session_factory, create_store_engine
from dziennik.infrastructure.passwords import hash_password
from dziennik.models.user import User

logger = logging.getLogger(__name__)


def create_user(db: Session, username: str, password: str) -> User:
    """Insert one user with a hashed password. Caller commits."""
    username = username.strip()
    if not username:
        raise ValueError("Username is empty.")
    if db.scalar(select(User).where(User.username == username)) is not None:
        raise ValueError(f"User {username!r} already exists.")
    user = User(username=username, password_hash=hash_password(password))
    db.add(user)
    db.flush()
    return user


def _read_password(from_stdin: bool) -> str:
    if from_stdin:
        return sys.stdin.readline().rstrip("\n")
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        raise ValueError("Passwords do not match.")
    return password


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dziennik-create-user",
        description="Create a user that can sign in through POST /api/login",
    )
    parser.add_argument("username")
    parser.add_argument(
        "--password-stdin", action="store_true",
        help="read the password from the first line of stdin",
    )
    parser.add_argument(
        "--database-url", default=None,
        help="store URL (default: DATABASE_URL from the environment)",
    )
    args = parser.parse_args(argv)

    settings = Settings(database_url=args.database_url) if args.database_url else Settings()
    engine = create_store_engine(settings.database_url, pool_size=1)
    try:
        password = _read_password(args.password_stdin)
        with create_session_factory(engine)() as db:
            user = create_user(db, args.username, password)
            db.commit()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        engine.dispose()

    logger.info(f"Created user {user.username}")
    print(f"Created user {user.username} (id {user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
