"""
Name: In-Memory Activity Repository

Responsibilities:
  - Append-only activity log in memory (tests/local dev)
  - Populate the acting user from the user repository on reads

Constraints / Notes:
  - Thread-safe access (Lock)
  - Records are never updated after append
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import List, Optional

from ...domain.entities import Activity, ActivityActor, utcnow
from ...domain.filters import Query
from ...domain.repositories import ACTIVITY_FILTER_FIELDS, UserRepository
from ...pagination import PageRequest
from .in_memory_matching import compile_predicate, newest_first, page_slice


class InMemoryActivityRepository:
    """R: Thread-safe in-memory ActivityRepository."""

    def __init__(self, users: Optional[UserRepository] = None) -> None:
        self._lock = Lock()
        self._activities: List[Activity] = []
        self._users = users

    def append(self, activity: Activity) -> None:
        stored = replace(activity, created_at=activity.created_at or utcnow(), actor=None)
        with self._lock:
            self._activities.append(stored)

    def count(self, query: Query = Query()) -> int:
        matches = compile_predicate(query, ACTIVITY_FILTER_FIELDS)
        with self._lock:
            return sum(1 for a in self._activities if matches(a))

    def list_activities(
        self, query: Query = Query(), page: Optional[PageRequest] = None
    ) -> List[Activity]:
        matches = compile_predicate(query, ACTIVITY_FILTER_FIELDS)
        with self._lock:
            found = [replace(a) for a in self._activities if matches(a)]
        window = page_slice(newest_first(found), page)
        return [self._with_actor(a) for a in window]

    def _with_actor(self, activity: Activity) -> Activity:
        if self._users is None or not activity.user_id:
            return activity
        user = self._users.get_user(activity.user_id)
        if user is None:
            return activity
        return replace(
            activity, actor=ActivityActor(id=user.id, name=user.name, photo=user.photo)
        )
