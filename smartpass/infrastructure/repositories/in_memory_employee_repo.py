"""
Name: In-Memory Employee Repository

Responsibilities:
  - Store employees in memory (tests/local dev)
  - Group creation counts by day or month for growth reports

Constraints / Notes:
  - Thread-safe access (Lock)
  - Ordering aligned with Postgres: created_at DESC, id DESC
"""

from __future__ import annotations

from collections import Counter
from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional, Tuple

from ...domain.entities import Employee, utcnow
from ...domain.filters import Query
from ...domain.repositories import EMPLOYEE_FILTER_FIELDS, Granularity
from ...pagination import PageRequest
from .in_memory_matching import compile_predicate, newest_first, page_slice

_PERIOD_FORMATS = {"day": "%Y-%m-%d", "month": "%Y-%m"}


class InMemoryEmployeeRepository:
    """R: Thread-safe in-memory EmployeeRepository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._employees: Dict[str, Employee] = {}

    def count(self, query: Query = Query()) -> int:
        matches = compile_predicate(query, EMPLOYEE_FILTER_FIELDS)
        with self._lock:
            return sum(1 for e in self._employees.values() if matches(e))

    def list_employees(
        self, query: Query = Query(), page: Optional[PageRequest] = None
    ) -> List[Employee]:
        matches = compile_predicate(query, EMPLOYEE_FILTER_FIELDS)
        with self._lock:
            found = [replace(e) for e in self._employees.values() if matches(e)]
        return page_slice(newest_first(found), page)

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        with self._lock:
            employee = self._employees.get(employee_id)
            return replace(employee) if employee else None

    def get_employee_by_code(self, code: str) -> Optional[Employee]:
        with self._lock:
            matches = [e for e in self._employees.values() if e.employee_id == code]
        if not matches:
            return None
        # R: Codes are not unique; prefer the oldest holder like a natural scan
        return replace(
            min(matches, key=lambda e: (e.created_at or utcnow(), e.id))
        )

    def create_employee(self, employee: Employee) -> Employee:
        now = utcnow()
        stored = replace(
            employee,
            created_at=employee.created_at or now,
            updated_at=employee.updated_at or now,
        )
        with self._lock:
            self._employees[stored.id] = stored
        return replace(stored)

    def update_employee(self, employee: Employee) -> bool:
        with self._lock:
            current = self._employees.get(employee.id)
            if current is None:
                return False
            self._employees[employee.id] = replace(
                employee,
                employee_id=current.employee_id,
                created_at=current.created_at,
                updated_at=utcnow(),
            )
            return True

    def delete_employee(self, employee_id: str) -> bool:
        with self._lock:
            return self._employees.pop(employee_id, None) is not None

    def count_created_since(
        self, since: datetime, granularity: Granularity
    ) -> List[Tuple[str, int]]:
        fmt = _PERIOD_FORMATS[granularity]
        with self._lock:
            created = [
                e.created_at for e in self._employees.values() if e.created_at
            ]
        buckets = Counter(
            ts.astimezone(timezone.utc).strftime(fmt) for ts in created if ts >= since
        )
        return sorted(buckets.items())
