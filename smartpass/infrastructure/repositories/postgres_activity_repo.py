"""
Name: PostgreSQL Activity Repository

Responsibilities:
  - Append activity records
  - List records with the acting user joined in (id, name, photo)
"""

from __future__ import annotations

from typing import List, Optional

from psycopg_pool import ConnectionPool

from ...domain.entities import Activity, ActivityActor
from ...domain.filters import Query
from ...domain.repositories import ACTIVITY_FILTER_FIELDS
from ...logger import logger
from ...pagination import PageRequest
from ..db.errors import translate_store_error
from .sql_filters import compile_where


class PostgresActivityRepository:
    """R: PostgreSQL implementation of ActivityRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ..db.pool import get_pool

        return get_pool()

    def _row_to_activity(self, row: tuple) -> Activity:
        (
            activity_id,
            user_id,
            action,
            target,
            target_id,
            created_at,
            actor_id,
            actor_first_name,
            actor_last_name,
            actor_photo,
        ) = row

        actor = None
        if actor_id is not None:
            actor = ActivityActor(
                id=actor_id,
                name=f"{actor_first_name} {actor_last_name}".strip(),
                photo=actor_photo,
            )

        return Activity(
            id=activity_id,
            user_id=user_id,
            action=action,
            target=target,
            target_id=target_id,
            created_at=created_at,
            actor=actor,
        )

    def append(self, activity: Activity) -> None:
        try:
            with self._get_pool().connection() as conn:
                conn.execute(
                    """
                    INSERT INTO activities (id, user_id, action, target, target_id)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (
                        activity.id,
                        activity.user_id,
                        activity.action,
                        activity.target,
                        activity.target_id,
                    ),
                )
        except Exception as exc:
            logger.warning(
                "PostgresActivityRepository: Failed to append activity",
                extra={"error": str(exc), "action": activity.action},
            )
            raise translate_store_error(exc, "append activity")

    def count(self, query: Query = Query()) -> int:
        where_clause, params = compile_where(query, ACTIVITY_FILTER_FIELDS)
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"SELECT COUNT(*) FROM activities {where_clause}", params
                ).fetchone()
        except Exception as exc:
            logger.warning(
                "PostgresActivityRepository: Failed to count activities",
                extra={"error": str(exc)},
            )
            raise translate_store_error(exc, "count activities")
        return int(row[0]) if row else 0

    def list_activities(
        self, query: Query = Query(), page: Optional[PageRequest] = None
    ) -> List[Activity]:
        where_clause, params = compile_where(query, ACTIVITY_FILTER_FIELDS, alias="a")
        limit_clause = ""
        if page is not None:
            limit_clause = "LIMIT %s OFFSET %s"
            params = [*params, page.limit, page.offset]

        sql = f"""
            SELECT a.id, a.user_id, a.action, a.target, a.target_id, a.created_at,
                   u.id, u.first_name, u.last_name, u.photo
            FROM activities a
            LEFT JOIN users u ON u.id = a.user_id
            {where_clause}
            ORDER BY a.created_at DESC, a.id DESC
            {limit_clause}
        """
        try:
            with self._get_pool().connection() as conn:
                rows = conn.execute(sql, params).fetchall()
        except Exception as exc:
            logger.warning(
                "PostgresActivityRepository: Failed to list activities",
                extra={"error": str(exc)},
            )
            raise translate_store_error(exc, "list activities")
        return [self._row_to_activity(row) for row in rows]
