"""
Name: Drop Users Script

Responsibilities:
  - Delete every user account (maintenance; activity rows are kept)

Usage:
  DATABASE_URL=... python scripts/drop_users.py --yes
"""

from __future__ import annotations

import argparse
import os
import sys

from smartpass.infrastructure.db.pool import close_pool, init_pool
from smartpass.infrastructure.repositories import PostgresUserRepository


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete every user account.")
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm the deletion (required)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    if not args.yes:
        raise SystemExit("Refusing to delete users without --yes.")

    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required.")

    init_pool(database_url=db_url, min_size=1, max_size=1)
    try:
        deleted = PostgresUserRepository().delete_all_users()
        print(f"Deleted {deleted} user(s).")
    finally:
        close_pool()


if __name__ == "__main__":
    main()
