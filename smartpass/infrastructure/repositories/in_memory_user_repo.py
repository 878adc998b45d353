"""
Name: In-Memory User Repository

Responsibilities:
  - Store users in memory (tests/local dev)
  - Enforce case-insensitive email uniqueness like the users.email index

Constraints / Notes:
  - Thread-safe access (Lock)
  - Returns copies so callers cannot mutate stored state in place
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, List, Optional

from ...domain.entities import User, utcnow
from ...domain.filters import Query
from ...domain.repositories import USER_FILTER_FIELDS
from ...exceptions import DuplicateKeyError
from ...pagination import PageRequest
from .in_memory_matching import compile_predicate, newest_first, page_slice


class InMemoryUserRepository:
    """R: Thread-safe in-memory UserRepository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[str, User] = {}

    def _email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        wanted = email.lower()
        return any(
            u.email.lower() == wanted and u.id != exclude_id
            for u in self._users.values()
        )

    def ping(self) -> bool:
        return True

    def count(self, query: Query = Query()) -> int:
        matches = compile_predicate(query, USER_FILTER_FIELDS)
        with self._lock:
            return sum(1 for u in self._users.values() if matches(u))

    def list_users(
        self, query: Query = Query(), page: Optional[PageRequest] = None
    ) -> List[User]:
        matches = compile_predicate(query, USER_FILTER_FIELDS)
        with self._lock:
            found = [replace(u) for u in self._users.values() if matches(u)]
        return page_slice(newest_first(found), page)

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        with self._lock:
            for user in self._users.values():
                if user.email.lower() == wanted:
                    return replace(user)
        return None

    def create_user(self, user: User) -> User:
        now = utcnow()
        stored = replace(
            user,
            email=user.email.lower(),
            created_at=user.created_at or now,
            updated_at=user.updated_at or now,
        )
        with self._lock:
            if self._email_taken(stored.email):
                raise DuplicateKeyError("Duplicate key on create user")
            self._users[stored.id] = stored
        return replace(stored)

    def update_user(self, user: User) -> bool:
        with self._lock:
            current = self._users.get(user.id)
            if current is None:
                return False
            if self._email_taken(user.email, exclude_id=user.id):
                raise DuplicateKeyError("Duplicate key on update user")
            self._users[user.id] = replace(
                user,
                email=user.email.lower(),
                created_at=current.created_at,
                updated_at=utcnow(),
            )
            return True

    def delete_user(self, user_id: str) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    def delete_all_users(self) -> int:
        with self._lock:
            removed = len(self._users)
            self._users.clear()
            return removed
