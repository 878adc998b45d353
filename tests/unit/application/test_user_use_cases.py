"""
Name: User Management Use Case Tests

Responsibilities:
  - Bootstrap, managed creation and open registration
  - Email conflicts on create and update
  - Permission merging and settings updates
  - Role and capability grant limits for non-administrators
"""

import pytest

from smartpass.application.use_cases import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetSettingsUseCase,
    GetUserUseCase,
    ListUsersInput,
    ListUsersUseCase,
    ServiceErrorCode,
    UpdateSettingsInput,
    UpdateSettingsUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)
from smartpass.domain.entities import (
    DEFAULT_LANGUAGE,
    Role,
    User,
    UserPermissions,
    new_id,
)
from smartpass.identity.passwords import BcryptPasswordHasher
from smartpass.infrastructure.repositories import (
    InMemoryActivityRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def repo():
    return InMemoryUserRepository()


@pytest.fixture
def activities():
    return InMemoryActivityRepository()


def _input(email="new@example.com", **fields) -> CreateUserInput:
    return CreateUserInput(
        first_name=fields.pop("first_name", "Nia"),
        last_name=fields.pop("last_name", "New"),
        email=email,
        temp_password=fields.pop("temp_password", "temp-pass"),
        **fields,
    )


def _store(repo, email, *, role=Role.VIEWER, permissions=None) -> User:
    return repo.create_user(
        User(
            id=new_id(),
            first_name="Sam",
            last_name="Stored",
            email=email,
            password_hash="x",
            role=role,
            permissions=permissions or UserPermissions(),
        )
    )


# ============================================================================
# Create
# ============================================================================


def test_first_anonymous_user_becomes_administrator(repo, hasher, activities):
    result = CreateUserUseCase(repo, hasher, activities).execute(
        _input(role=Role.VIEWER)
    )

    user = result.user
    assert user.role is Role.ADMINISTRATOR
    assert user.permissions == UserPermissions.all_granted()
    assert hasher.compare("temp-pass", user.password_hash)
    assert activities.list_activities()[0].user_id == user.id


def test_anonymous_create_rejected_once_users_exist(repo, hasher):
    _store(repo, "first@example.com")

    result = CreateUserUseCase(repo, hasher).execute(_input())

    assert result.error.code == ServiceErrorCode.UNAUTHORIZED
    assert repo.count() == 1


def test_open_registration_forces_defaults(repo, hasher):
    _store(repo, "first@example.com")
    use_case = CreateUserUseCase(repo, hasher, allow_open_registration=True)

    result = use_case.execute(
        _input(role=Role.ADMINISTRATOR, permissions={"manageUsers": True})
    )

    assert result.user.role is Role.VIEWER
    assert result.user.permissions == UserPermissions()


def test_manager_creates_with_requested_role_and_flags(repo, hasher):
    actor = _store(
        repo, "boss@example.com", role=Role.MANAGER,
        permissions=UserPermissions(
            manage_users=True, add_employees=True, generate_qr_codes=True
        ),
    )

    result = CreateUserUseCase(repo, hasher).execute(
        _input(
            actor=actor,
            role=Role.MANAGER,
            position="Lead",
            permissions={"addEmployees": True, "generateQRCodes": True},
        )
    )

    user = result.user
    assert user.role is Role.MANAGER
    assert user.position == "Lead"
    assert user.permissions.add_employees is True
    assert user.permissions.generate_qr_codes is True
    assert user.permissions.view_employees is True
    assert user.force_password_change is True


def test_manager_cannot_create_administrator(repo, hasher):
    actor = _store(
        repo, "boss@example.com", role=Role.MANAGER,
        permissions=UserPermissions(manage_users=True),
    )

    result = CreateUserUseCase(repo, hasher).execute(
        _input(actor=actor, role=Role.ADMINISTRATOR)
    )

    assert result.error.code == ServiceErrorCode.FORBIDDEN
    assert repo.get_user_by_email("new@example.com") is None


def test_manager_cannot_grant_flags_it_lacks(repo, hasher):
    actor = _store(
        repo, "boss@example.com", role=Role.MANAGER,
        permissions=UserPermissions(manage_users=True),
    )

    result = CreateUserUseCase(repo, hasher).execute(
        _input(actor=actor, permissions={"deactivateEmployees": True})
    )

    assert result.error.code == ServiceErrorCode.FORBIDDEN
    assert "deactivateEmployees" in result.error.message
    assert repo.count() == 1


def test_manager_may_withhold_flags_it_lacks(repo, hasher):
    actor = _store(
        repo, "boss@example.com", role=Role.MANAGER,
        permissions=UserPermissions(manage_users=True),
    )

    result = CreateUserUseCase(repo, hasher).execute(
        _input(actor=actor, permissions={"deactivateEmployees": False})
    )

    assert result.error is None
    assert result.user.permissions.deactivate_employees is False


def test_administrator_creates_administrator(repo, hasher):
    admin = _store(repo, "admin@example.com", role=Role.ADMINISTRATOR)

    result = CreateUserUseCase(repo, hasher).execute(
        _input(actor=admin, role=Role.ADMINISTRATOR, permissions={"manageUsers": True})
    )

    assert result.user.role is Role.ADMINISTRATOR
    assert result.user.permissions.manage_users is True


def test_create_without_manage_users_is_forbidden(repo, hasher):
    actor = _store(repo, "viewer@example.com")

    result = CreateUserUseCase(repo, hasher).execute(_input(actor=actor))

    assert result.error.code == ServiceErrorCode.FORBIDDEN


def test_duplicate_email_conflicts(repo, hasher):
    admin = _store(repo, "admin@example.com", role=Role.ADMINISTRATOR)

    result = CreateUserUseCase(repo, hasher).execute(
        _input("ADMIN@example.com", actor=admin)
    )

    assert result.error.code == ServiceErrorCode.CONFLICT
    assert result.error.message == "User with this email already exists"


@pytest.mark.parametrize("missing", ["first_name", "last_name", "temp_password"])
def test_create_requires_fields(repo, hasher, missing):
    result = CreateUserUseCase(repo, hasher).execute(_input(**{missing: ""}))
    assert result.error.code == ServiceErrorCode.VALIDATION_ERROR


# ============================================================================
# Update / Delete
# ============================================================================


def test_update_merges_permissions_and_rehashes(repo, hasher, activities):
    admin = _store(repo, "admin@example.com", role=Role.ADMINISTRATOR)
    user = _store(repo, "sam@example.com", permissions=UserPermissions(add_employees=True))

    result = UpdateUserUseCase(repo, hasher, activities).execute(
        UpdateUserInput(
            user_id=user.id,
            changes={"position": "Clerk", "role": "Manager"},
            permissions={"editEmployees": True},
            password="fresh-pass",
            actor=admin,
        )
    )

    updated = result.user
    assert updated.position == "Clerk"
    assert updated.role is Role.MANAGER
    assert updated.permissions.add_employees is True
    assert updated.permissions.edit_employees is True
    assert hasher.compare("fresh-pass", repo.get_user(user.id).password_hash)
    logged = activities.list_activities()[0]
    assert logged.action == "User Updated"
    assert logged.user_id == admin.id


def test_manager_cannot_promote_self_to_administrator(repo, hasher):
    manager = _store(
        repo, "boss@example.com", role=Role.MANAGER,
        permissions=UserPermissions(manage_users=True),
    )

    result = UpdateUserUseCase(repo, hasher).execute(
        UpdateUserInput(
            user_id=manager.id, changes={"role": "Administrator"}, actor=manager
        )
    )

    assert result.error.code == ServiceErrorCode.FORBIDDEN
    assert repo.get_user(manager.id).role is Role.MANAGER


def test_manager_cannot_grant_self_missing_flags(repo, hasher):
    manager = _store(
        repo, "boss@example.com", role=Role.MANAGER,
        permissions=UserPermissions(manage_users=True),
    )

    result = UpdateUserUseCase(repo, hasher).execute(
        UpdateUserInput(
            user_id=manager.id,
            permissions={"manageUsers": True, "deactivateEmployees": True},
            actor=manager,
        )
    )

    assert result.error.code == ServiceErrorCode.FORBIDDEN
    assert repo.get_user(manager.id).permissions.deactivate_employees is False


def test_manager_grants_flags_it_holds(repo, hasher):
    manager = _store(
        repo, "boss@example.com", role=Role.MANAGER,
        permissions=UserPermissions(manage_users=True, edit_employees=True),
    )
    user = _store(repo, "sam@example.com")

    result = UpdateUserUseCase(repo, hasher).execute(
        UpdateUserInput(
            user_id=user.id,
            changes={"role": "Manager"},
            permissions={"editEmployees": True, "addEmployees": False},
            actor=manager,
        )
    )

    assert result.user.role is Role.MANAGER
    assert result.user.permissions.edit_employees is True


def test_update_email_conflict(repo, hasher):
    _store(repo, "taken@example.com")
    user = _store(repo, "sam@example.com")

    result = UpdateUserUseCase(repo, hasher).execute(
        UpdateUserInput(user_id=user.id, changes={"email": "Taken@example.com"})
    )

    assert result.error.code == ServiceErrorCode.CONFLICT
    assert repo.get_user(user.id).email == "sam@example.com"


def test_update_keeping_own_email(repo, hasher):
    user = _store(repo, "sam@example.com")

    result = UpdateUserUseCase(repo, hasher).execute(
        UpdateUserInput(user_id=user.id, changes={"email": "SAM@example.com"})
    )

    assert result.error is None


def test_update_missing_user(repo, hasher):
    result = UpdateUserUseCase(repo, hasher).execute(
        UpdateUserInput(user_id=new_id(), changes={"position": "x"})
    )
    assert result.error.code == ServiceErrorCode.NOT_FOUND


def test_delete_user(repo, activities):
    user = _store(repo, "sam@example.com")
    use_case = DeleteUserUseCase(repo, activities)

    assert use_case.execute(user.id, actor_id="admin").deleted is True
    assert use_case.execute(user.id).error.code == ServiceErrorCode.NOT_FOUND
    assert GetUserUseCase(repo).execute(user.id).error is not None


# ============================================================================
# List / Settings
# ============================================================================


def test_list_users_search(repo):
    _store(repo, "alpha@example.com")
    _store(repo, "beta@example.com")

    result = ListUsersUseCase(repo).execute(ListUsersInput(search="ALPHA"))

    assert result.total == 1
    assert result.items[0].email == "alpha@example.com"


def test_settings_defaults_and_partial_update(repo, activities):
    user = _store(repo, "sam@example.com")

    assert GetSettingsUseCase(repo).execute(user.id).settings.language == DEFAULT_LANGUAGE

    result = UpdateSettingsUseCase(repo, activities).execute(
        UpdateSettingsInput(user_id=user.id, dark_mode=True, language="")
    )

    assert result.settings.dark_mode is True
    assert result.settings.language == DEFAULT_LANGUAGE
    assert repo.get_user(user.id).settings.dark_mode is True
    assert activities.list_activities()[0].action == "Settings Updated"


def test_settings_missing_user(repo):
    assert GetSettingsUseCase(repo).execute(new_id()).error.code == ServiceErrorCode.NOT_FOUND
    assert (
        UpdateSettingsUseCase(repo).execute(UpdateSettingsInput(user_id=new_id())).error
        is not None
    )
