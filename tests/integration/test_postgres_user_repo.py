"""
Name: PostgreSQL User Repository Integration Tests

Responsibilities:
  - JSONB permissions / settings survive a write and read
  - Unique email index surfaces as DuplicateKeyError
  - Text search treats LIKE wildcards literally
  - Update / delete report whether a row was touched

Collaborators:
  - smartpass.infrastructure.repositories.PostgresUserRepository
  - conftest: migrations, pool and table cleanup

Setup:
  RUN_INTEGRATION=1 DATABASE_URL=postgresql://... pytest -m integration
"""

import os
from dataclasses import replace

import pytest

if os.getenv("RUN_INTEGRATION") != "1":
    pytest.skip(
        "Set RUN_INTEGRATION=1 to run integration tests", allow_module_level=True
    )

from smartpass.domain.entities import (  # noqa: E402
    Role,
    User,
    UserPermissions,
    UserSettings,
    new_id,
)
from smartpass.domain.filters import Equals, Query, text_search  # noqa: E402
from smartpass.exceptions import DuplicateKeyError  # noqa: E402
from smartpass.infrastructure.repositories import PostgresUserRepository  # noqa: E402
from smartpass.pagination import PageRequest  # noqa: E402

pytestmark = pytest.mark.integration


@pytest.fixture
def repo(db_pool, db_conn) -> PostgresUserRepository:
    return PostgresUserRepository(pool=db_pool)


def _user(email: str, **fields) -> User:
    return User(
        id=new_id(),
        first_name=fields.pop("first_name", "Sam"),
        last_name=fields.pop("last_name", "Stored"),
        email=email,
        password_hash="hash",
        **fields,
    )


def test_create_and_read_back_jsonb_columns(repo, db_conn):
    user = _user(
        "Sam@Example.com",
        role=Role.MANAGER,
        permissions=UserPermissions(manage_users=True, generate_qr_codes=True),
        settings=UserSettings(dark_mode=True, language="es", timezone="UTC"),
    )

    created = repo.create_user(user)
    fetched = repo.get_user(user.id)
    raw = db_conn.execute(
        "SELECT email, permissions FROM users WHERE id = %s", (user.id,)
    ).fetchone()

    assert created.email == "sam@example.com"
    assert created.created_at is not None
    assert fetched.role is Role.MANAGER
    assert fetched.permissions == user.permissions
    assert fetched.settings == user.settings
    assert raw[0] == "sam@example.com"
    assert raw[1]["manageUsers"] is True
    assert raw[1]["viewEmployees"] is True


def test_duplicate_email_raises(repo):
    repo.create_user(_user("sam@example.com"))

    with pytest.raises(DuplicateKeyError):
        repo.create_user(_user("SAM@example.com"))

    assert repo.count() == 1


def test_get_by_email_is_case_insensitive(repo):
    stored = repo.create_user(_user("sam@example.com"))

    assert repo.get_user_by_email("  SAM@Example.com ").id == stored.id
    assert repo.get_user_by_email("nobody@example.com") is None


def test_search_treats_wildcards_literally(repo):
    repo.create_user(_user("percent@example.com", last_name="100%"))
    repo.create_user(_user("plain@example.com", last_name="1000"))

    percent = Query().where(text_search("100%", ("first_name", "last_name")))
    underscore = Query().where(text_search("_", ("email",)))

    assert [u.email for u in repo.list_users(percent)] == ["percent@example.com"]
    assert repo.count(underscore) == 0


def test_list_filters_and_pages_newest_first(repo, db_conn):
    first = repo.create_user(_user("a@example.com", role=Role.VIEWER))
    second = repo.create_user(_user("b@example.com", role=Role.VIEWER))
    repo.create_user(_user("c@example.com", role=Role.ADMINISTRATOR))
    db_conn.execute(
        "UPDATE users SET created_at = now() - interval '1 day' WHERE id = %s",
        (first.id,),
    )

    viewers = Query().where(Equals("role", Role.VIEWER))
    page_one = repo.list_users(viewers, PageRequest(page=1, limit=1))
    page_two = repo.list_users(viewers, PageRequest(page=2, limit=1))

    assert repo.count(viewers) == 2
    assert [u.id for u in page_one] == [second.id]
    assert [u.id for u in page_two] == [first.id]


def test_update_and_delete_report_rowcount(repo):
    stored = repo.create_user(_user("sam@example.com"))

    changed = repo.update_user(replace(stored, position="Clerk", role=Role.MANAGER))
    missing = repo.update_user(replace(stored, id=new_id()))

    assert changed is True
    assert missing is False
    assert repo.get_user(stored.id).position == "Clerk"
    assert repo.delete_user(stored.id) is True
    assert repo.delete_user(stored.id) is False


def test_delete_all_users(repo):
    repo.create_user(_user("a@example.com"))
    repo.create_user(_user("b@example.com"))

    assert repo.delete_all_users() == 2
    assert repo.count() == 0


def test_ping(repo):
    assert repo.ping() is True
