"""
Name: Admin Provisioning Script

Responsibilities:
  - Create an Administrator account (idempotent by email)
  - Hash the password with bcrypt
  - Store the user through PostgresUserRepository

Usage:
  DATABASE_URL=... python scripts/create_admin.py --email admin@example.com \
      --first-name Ada --last-name Admin
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys

from smartpass.domain.entities import Role, User, UserPermissions, new_id
from smartpass.identity.passwords import BcryptPasswordHasher
from smartpass.infrastructure.db.pool import close_pool, init_pool
from smartpass.infrastructure.repositories import PostgresUserRepository

DEFAULT_BCRYPT_ROUNDS = 10


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create a user.")
    return db_url


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password is required.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create an Administrator account (idempotent)."
    )
    parser.add_argument("--email", required=True, help="Email (normalized)")
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    parser.add_argument(
        "--password",
        help="Password (omit to be prompted securely)",
    )
    parser.add_argument(
        "--keep-password",
        action="store_true",
        help="Do not force a password change on first login",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    email = args.email.strip().lower()
    if not email:
        raise SystemExit("Email is required.")

    db_url = _require_database_url()
    password = args.password or _prompt_password()
    hasher = BcryptPasswordHasher(
        rounds=int(os.getenv("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS))
    )

    init_pool(database_url=db_url, min_size=1, max_size=1)
    try:
        users = PostgresUserRepository()
        existing = users.get_user_by_email(email)
        if existing is not None:
            print(
                "User already exists: "
                f"id={existing.id} email={email} role={existing.role.value}"
            )
            return

        created = users.create_user(
            User(
                id=new_id(),
                first_name=args.first_name,
                last_name=args.last_name,
                email=email,
                password_hash=hasher.hash(password),
                role=Role.ADMINISTRATOR,
                permissions=UserPermissions.all_granted(),
                force_password_change=not args.keep_password,
            )
        )
        print(f"Created user: id={created.id} email={email} role={created.role.value}")
    finally:
        close_pool()


if __name__ == "__main__":
    main()
