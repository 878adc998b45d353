"""
Name: PostgreSQL User Repository

Responsibilities:
  - Implement UserRepository for PostgreSQL (credential store)
  - Map database rows into User records
  - Persist permissions and settings as JSONB
"""

from __future__ import annotations

from typing import List, Optional

from psycopg.types.json import Json
from psycopg_pool import ConnectionPool

from ...domain.entities import Role, User, UserPermissions, UserSettings
from ...domain.filters import Query
from ...domain.repositories import USER_FILTER_FIELDS
from ...exceptions import DatabaseError
from ...logger import logger
from ...pagination import PageRequest
from ..db.errors import translate_store_error
from .sql_filters import compile_where

_COLUMNS = """
    id, first_name, last_name, email, password_hash, role, permissions,
    settings, position, photo, force_password_change, created_at, updated_at
"""


class PostgresUserRepository:
    """R: PostgreSQL implementation of UserRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ..db.pool import get_pool

        return get_pool()

    def _row_to_user(self, row: tuple) -> User:
        (
            user_id,
            first_name,
            last_name,
            email,
            password_hash,
            role,
            permissions,
            settings,
            position,
            photo,
            force_password_change,
            created_at,
            updated_at,
        ) = row

        try:
            parsed_role = Role(role)
        except ValueError as exc:
            raise DatabaseError(f"Invalid user role in database: {role}") from exc

        return User(
            id=user_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            role=parsed_role,
            permissions=UserPermissions.from_dict(permissions),
            settings=UserSettings.from_dict(settings),
            position=position,
            photo=photo,
            force_password_change=force_password_change,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _fail(self, exc: Exception, action: str, **extra) -> DatabaseError:
        logger.warning(
            f"PostgresUserRepository: Failed to {action}",
            extra={"error": str(exc), **extra},
        )
        return translate_store_error(exc, action)

    def ping(self) -> bool:
        """R: Health check (SELECT 1)."""
        try:
            with self._get_pool().connection() as conn:
                conn.execute("SELECT 1").fetchone()
            return True
        except Exception as exc:
            logger.warning(
                "PostgresUserRepository: Ping failed", extra={"error": str(exc)}
            )
            return False

    def count(self, query: Query = Query()) -> int:
        where_clause, params = compile_where(query, USER_FILTER_FIELDS)
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"SELECT COUNT(*) FROM users {where_clause}", params
                ).fetchone()
        except Exception as exc:
            raise self._fail(exc, "count users")
        return int(row[0]) if row else 0

    def list_users(
        self, query: Query = Query(), page: Optional[PageRequest] = None
    ) -> List[User]:
        where_clause, params = compile_where(query, USER_FILTER_FIELDS)
        limit_clause = ""
        if page is not None:
            limit_clause = "LIMIT %s OFFSET %s"
            params = [*params, page.limit, page.offset]

        sql = f"""
            SELECT {_COLUMNS}
            FROM users
            {where_clause}
            ORDER BY created_at DESC, id DESC
            {limit_clause}
        """
        try:
            with self._get_pool().connection() as conn:
                rows = conn.execute(sql, params).fetchall()
        except Exception as exc:
            raise self._fail(exc, "list users")
        return [self._row_to_user(row) for row in rows]

    def get_user(self, user_id: str) -> Optional[User]:
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"SELECT {_COLUMNS} FROM users WHERE id = %s", (user_id,)
                ).fetchone()
        except Exception as exc:
            raise self._fail(exc, "get user", user_id=user_id)
        return self._row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"SELECT {_COLUMNS} FROM users WHERE email = %s",
                    (email.strip().lower(),),
                ).fetchone()
        except Exception as exc:
            raise self._fail(exc, "get user by email")
        return self._row_to_user(row) if row else None

    def create_user(self, user: User) -> User:
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"""
                    INSERT INTO users (
                        id, first_name, last_name, email, password_hash, role,
                        permissions, settings, position, photo,
                        force_password_change
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        user.id,
                        user.first_name,
                        user.last_name,
                        user.email.lower(),
                        user.password_hash,
                        user.role.value,
                        Json(user.permissions.to_dict()),
                        Json(user.settings.to_dict()),
                        user.position,
                        user.photo,
                        user.force_password_change,
                    ),
                ).fetchone()
        except Exception as exc:
            raise self._fail(exc, "create user")

        if not row:
            raise DatabaseError("User creation failed: no row returned")
        return self._row_to_user(row)

    def update_user(self, user: User) -> bool:
        try:
            with self._get_pool().connection() as conn:
                cur = conn.execute(
                    """
                    UPDATE users
                    SET first_name = %s,
                        last_name = %s,
                        email = %s,
                        password_hash = %s,
                        role = %s,
                        permissions = %s,
                        settings = %s,
                        position = %s,
                        photo = %s,
                        force_password_change = %s,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (
                        user.first_name,
                        user.last_name,
                        user.email.lower(),
                        user.password_hash,
                        user.role.value,
                        Json(user.permissions.to_dict()),
                        Json(user.settings.to_dict()),
                        user.position,
                        user.photo,
                        user.force_password_change,
                        user.id,
                    ),
                )
        except Exception as exc:
            raise self._fail(exc, "update user", user_id=user.id)
        return cur.rowcount > 0

    def delete_user(self, user_id: str) -> bool:
        try:
            with self._get_pool().connection() as conn:
                cur = conn.execute("DELETE FROM users WHERE id = %s", (user_id,))
        except Exception as exc:
            raise self._fail(exc, "delete user", user_id=user_id)
        return cur.rowcount > 0

    def delete_all_users(self) -> int:
        try:
            with self._get_pool().connection() as conn:
                cur = conn.execute("DELETE FROM users")
        except Exception as exc:
            raise self._fail(exc, "delete all users")
        return cur.rowcount
