"""Utility script to add a user to the directory and print an access token."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import User
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a forum user for local testing of the notification API.",
    )
    parser.add_argument("username", help="Unique username of the new user")
    parser.add_argument(
        "--role",
        default="user",
        choices=("user", "admin"),
        help="Role of the user (default: user)",
    )
    parser.add_argument("--avatar", default=None, help="Avatar URL (optional)")
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        user = UserRepository(session).create(
            User(id=None, username=args.username, role=args.role, avatar=args.avatar)
        )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the user: {exc}") from exc
    finally:
        session.close()

    token = create_access_token(user_id=user.id, username=user.username, role=user.role)
    print(
        "User created:\n"
        f"  ID: {user.id}\n"
        f"  Username: {user.username}\n"
        f"  Role: {user.role}\n"
        f"  Token: {token}"
    )


if __name__ == "__main__":
    main()
