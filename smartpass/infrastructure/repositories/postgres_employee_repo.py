"""
Name: PostgreSQL Employee Repository

Responsibilities:
  - Implement EmployeeRepository for PostgreSQL
  - Aggregate creation counts per day / month for growth reports
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from psycopg_pool import ConnectionPool

from ...domain.entities import Employee, EmployeeStatus
from ...domain.filters import Query
from ...domain.repositories import EMPLOYEE_FILTER_FIELDS, Granularity
from ...exceptions import DatabaseError
from ...logger import logger
from ...pagination import PageRequest
from ..db.errors import translate_store_error
from .sql_filters import compile_where

_COLUMNS = """
    id, name, employee_id, email, mobile, position, department, company,
    office_location, status, qr_code, id_card_expiration_date, photo,
    created_at, updated_at
"""

# R: to_char patterns; keys come from the Granularity literal only
_PERIOD_PATTERNS = {"day": "YYYY-MM-DD", "month": "YYYY-MM"}


class PostgresEmployeeRepository:
    """R: PostgreSQL implementation of EmployeeRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ..db.pool import get_pool

        return get_pool()

    def _row_to_employee(self, row: tuple) -> Employee:
        (
            employee_pk,
            name,
            employee_code,
            email,
            mobile,
            position,
            department,
            company,
            office_location,
            status,
            qr_code,
            id_card_expiration_date,
            photo,
            created_at,
            updated_at,
        ) = row

        return Employee(
            id=employee_pk,
            name=name,
            employee_id=employee_code,
            email=email,
            mobile=mobile,
            position=position,
            department=department,
            company=company,
            office_location=office_location,
            status=EmployeeStatus(status),
            qr_code=qr_code,
            id_card_expiration_date=id_card_expiration_date,
            photo=photo,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _fail(self, exc: Exception, action: str, **extra) -> DatabaseError:
        logger.warning(
            f"PostgresEmployeeRepository: Failed to {action}",
            extra={"error": str(exc), **extra},
        )
        return translate_store_error(exc, action)

    def _fetch_one(self, where: str, value: str, action: str) -> Optional[Employee]:
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"""
                    SELECT {_COLUMNS} FROM employees
                    WHERE {where}
                    ORDER BY created_at ASC
                    LIMIT 1
                    """,
                    (value,),
                ).fetchone()
        except Exception as exc:
            raise self._fail(exc, action)
        return self._row_to_employee(row) if row else None

    def count(self, query: Query = Query()) -> int:
        where_clause, params = compile_where(query, EMPLOYEE_FILTER_FIELDS)
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"SELECT COUNT(*) FROM employees {where_clause}", params
                ).fetchone()
        except Exception as exc:
            raise self._fail(exc, "count employees")
        return int(row[0]) if row else 0

    def list_employees(
        self, query: Query = Query(), page: Optional[PageRequest] = None
    ) -> List[Employee]:
        where_clause, params = compile_where(query, EMPLOYEE_FILTER_FIELDS)
        limit_clause = ""
        if page is not None:
            limit_clause = "LIMIT %s OFFSET %s"
            params = [*params, page.limit, page.offset]

        sql = f"""
            SELECT {_COLUMNS}
            FROM employees
            {where_clause}
            ORDER BY created_at DESC, id DESC
            {limit_clause}
        """
        try:
            with self._get_pool().connection() as conn:
                rows = conn.execute(sql, params).fetchall()
        except Exception as exc:
            raise self._fail(exc, "list employees")
        return [self._row_to_employee(row) for row in rows]

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return self._fetch_one("id = %s", employee_id, "get employee")

    def get_employee_by_code(self, code: str) -> Optional[Employee]:
        return self._fetch_one("employee_id = %s", code, "get employee by code")

    def create_employee(self, employee: Employee) -> Employee:
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"""
                    INSERT INTO employees (
                        id, name, employee_id, email, mobile, position,
                        department, company, office_location, status, qr_code,
                        id_card_expiration_date, photo
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        employee.id,
                        employee.name,
                        employee.employee_id,
                        employee.email,
                        employee.mobile,
                        employee.position,
                        employee.department,
                        employee.company,
                        employee.office_location,
                        employee.status.value,
                        employee.qr_code,
                        employee.id_card_expiration_date,
                        employee.photo,
                    ),
                ).fetchone()
        except Exception as exc:
            raise self._fail(exc, "create employee")

        if not row:
            raise DatabaseError("Employee creation failed: no row returned")
        return self._row_to_employee(row)

    def update_employee(self, employee: Employee) -> bool:
        # R: employee_id and created_at are never rewritten
        try:
            with self._get_pool().connection() as conn:
                cur = conn.execute(
                    """
                    UPDATE employees
                    SET name = %s,
                        email = %s,
                        mobile = %s,
                        position = %s,
                        department = %s,
                        company = %s,
                        office_location = %s,
                        status = %s,
                        qr_code = %s,
                        id_card_expiration_date = %s,
                        photo = %s,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (
                        employee.name,
                        employee.email,
                        employee.mobile,
                        employee.position,
                        employee.department,
                        employee.company,
                        employee.office_location,
                        employee.status.value,
                        employee.qr_code,
                        employee.id_card_expiration_date,
                        employee.photo,
                        employee.id,
                    ),
                )
        except Exception as exc:
            raise self._fail(exc, "update employee", employee_id=employee.id)
        return cur.rowcount > 0

    def delete_employee(self, employee_id: str) -> bool:
        try:
            with self._get_pool().connection() as conn:
                cur = conn.execute(
                    "DELETE FROM employees WHERE id = %s", (employee_id,)
                )
        except Exception as exc:
            raise self._fail(exc, "delete employee", employee_id=employee_id)
        return cur.rowcount > 0

    def count_created_since(
        self, since: datetime, granularity: Granularity
    ) -> List[Tuple[str, int]]:
        pattern = _PERIOD_PATTERNS[granularity]
        try:
            with self._get_pool().connection() as conn:
                rows = conn.execute(
                    f"""
                    SELECT to_char(created_at AT TIME ZONE 'UTC', '{pattern}') AS period,
                           COUNT(*)
                    FROM employees
                    WHERE created_at >= %s
                    GROUP BY period
                    ORDER BY period ASC
                    """,
                    (since,),
                ).fetchall()
        except Exception as exc:
            raise self._fail(exc, "aggregate employee growth")
        return [(period, int(total)) for period, total in rows]
