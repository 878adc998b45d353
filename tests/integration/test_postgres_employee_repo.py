"""
Name: PostgreSQL Employee Repository Integration Tests

Responsibilities:
  - Create / read / update / delete against the migrated schema
  - Code lookup returns the oldest holder of a repeated code
  - Day and month growth buckets (UTC, to_char)
  - Search and status filters

Collaborators:
  - smartpass.infrastructure.repositories.PostgresEmployeeRepository
  - conftest: migrations, pool and table cleanup

Setup:
  RUN_INTEGRATION=1 DATABASE_URL=postgresql://... pytest -m integration
"""

import os
from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

if os.getenv("RUN_INTEGRATION") != "1":
    pytest.skip(
        "Set RUN_INTEGRATION=1 to run integration tests", allow_module_level=True
    )

from smartpass.domain.entities import Employee, EmployeeStatus, new_id  # noqa: E402
from smartpass.domain.filters import Equals, Query, text_search  # noqa: E402
from smartpass.infrastructure.repositories import (  # noqa: E402
    PostgresEmployeeRepository,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def repo(db_pool, db_conn) -> PostgresEmployeeRepository:
    return PostgresEmployeeRepository(pool=db_pool)


def _employee(name: str = "Jane Doe", **fields) -> Employee:
    return Employee(
        id=new_id(),
        name=name,
        employee_id=fields.pop("employee_id", "EMP123456"),
        company=fields.pop("company", "Acme"),
        **fields,
    )


def _set_created_at(db_conn, employee_id: str, created_at: datetime) -> None:
    db_conn.execute(
        "UPDATE employees SET created_at = %s WHERE id = %s",
        (created_at, employee_id),
    )


def test_create_and_get(repo):
    employee = _employee(
        email="jane@example.com",
        status=EmployeeStatus.INACTIVE,
        id_card_expiration_date=date(2026, 12, 31),
    )

    created = repo.create_employee(employee)
    fetched = repo.get_employee(employee.id)

    assert created.created_at is not None
    assert fetched.status is EmployeeStatus.INACTIVE
    assert fetched.id_card_expiration_date == date(2026, 12, 31)
    assert fetched.photo == employee.photo
    assert repo.get_employee(new_id()) is None


def test_code_lookup_returns_oldest(repo, db_conn):
    older = repo.create_employee(_employee("Older"))
    newer = repo.create_employee(_employee("Newer"))
    _set_created_at(db_conn, older.id, datetime(2025, 1, 1, tzinfo=timezone.utc))
    _set_created_at(db_conn, newer.id, datetime(2025, 2, 1, tzinfo=timezone.utc))

    assert repo.get_employee_by_code("EMP123456").id == older.id
    assert repo.get_employee_by_code("EMP000000") is None


def test_update_keeps_code_and_created_at(repo):
    stored = repo.create_employee(_employee())

    changed = repo.update_employee(
        replace(stored, name="Jane Smith", employee_id="EMP999999", qr_code="data:x")
    )
    fetched = repo.get_employee(stored.id)

    assert changed is True
    assert fetched.name == "Jane Smith"
    assert fetched.qr_code == "data:x"
    assert fetched.employee_id == "EMP123456"
    assert fetched.created_at == stored.created_at
    assert repo.update_employee(replace(stored, id=new_id())) is False


def test_delete(repo):
    stored = repo.create_employee(_employee())

    assert repo.delete_employee(stored.id) is True
    assert repo.delete_employee(stored.id) is False
    assert repo.count() == 0


def test_search_and_status_filters(repo):
    repo.create_employee(_employee("Jane Doe", department="Sales"))
    repo.create_employee(_employee("John Roe", department="R_D"))
    repo.create_employee(
        _employee("Jim Poe", department="RXD", status=EmployeeStatus.INACTIVE)
    )

    underscored = Query().where(text_search("r_d", ("name", "department")))
    active = Query().where(Equals("status", EmployeeStatus.ACTIVE))

    assert [e.name for e in repo.list_employees(underscored)] == ["John Roe"]
    assert repo.count(active) == 2


def test_growth_buckets(repo, db_conn):
    moments = [
        datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc),
        datetime(2025, 3, 1, 23, 59, tzinfo=timezone.utc),
        datetime(2025, 3, 3, 0, 0, tzinfo=timezone.utc),
        datetime(2025, 4, 2, 12, 0, tzinfo=timezone.utc),
        datetime(2024, 12, 31, 12, 0, tzinfo=timezone.utc),
    ]
    for created_at in moments:
        stored = repo.create_employee(_employee())
        _set_created_at(db_conn, stored.id, created_at)

    since = datetime(2025, 1, 1, tzinfo=timezone.utc)

    assert repo.count_created_since(since, "day") == [
        ("2025-03-01", 2),
        ("2025-03-03", 1),
        ("2025-04-02", 1),
    ]
    assert repo.count_created_since(since, "month") == [
        ("2025-03", 3),
        ("2025-04", 1),
    ]
