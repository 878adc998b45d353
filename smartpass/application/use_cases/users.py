"""
Name: User Management Use Cases

Responsibilities:
  - List, get, create, update and delete users
  - Bootstrap the first account as Administrator
  - Read and update the caller's own settings

Collaborators:
  - domain.repositories.UserRepository, ActivityRepository
  - domain.services.PasswordHasher
  - domain.access_policy: manageUsers checks, grant limits for non-admins

Constraints:
  - Emails are unique (case-insensitive); clashes surface as CONFLICT
  - Unauthenticated creation is only accepted on an empty store, or when
    open registration is enabled (then role and permissions are defaults)
  - Only an Administrator assigns the Administrator role; other managers
    grant only the capabilities they hold
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, Dict

from ...domain.access_policy import authorize
from ...domain.entities import (
    ActivityAction,
    Capability,
    Role,
    User,
    UserPermissions,
    new_id,
    utcnow,
)
from ...domain.filters import Query, date_range_preset, text_search
from ...domain.repositories import ActivityRepository, UserRepository
from ...domain.services import PasswordHasher
from ...exceptions import DuplicateKeyError
from ...logger import logger
from ...pagination import PageRequest, total_pages
from ..activity_log import record_activity
from .results import (
    DeleteResult,
    PageResult,
    ServiceError,
    ServiceErrorCode,
    SettingsResult,
    UserResult,
    not_found,
)

USER_SEARCH_FIELDS = ("first_name", "last_name", "email", "role")

# R: Keys an update may touch (camelCase mapping happens in the API schema)
USER_MUTABLE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "photo",
    "position",
    "role",
    "force_password_change",
)


def _email_conflict() -> ServiceError:
    return ServiceError(
        code=ServiceErrorCode.CONFLICT,
        message="User with this email already exists",
    )


def _grant_error(
    actor: User, role: Role | None, flags: Dict[str, Any] | None
) -> ServiceError | None:
    """
    R: A non-administrator may not assign the Administrator role, nor grant
    a capability it does not hold itself.
    """
    if actor.role == Role.ADMINISTRATOR:
        return None
    if role == Role.ADMINISTRATOR:
        return ServiceError(
            code=ServiceErrorCode.FORBIDDEN,
            message="Only an Administrator can assign the Administrator role",
        )
    for key, value in (flags or {}).items():
        try:
            capability = Capability(key)
        except ValueError:
            continue
        if value and not authorize(actor, capability):
            return ServiceError(
                code=ServiceErrorCode.FORBIDDEN,
                message=f"Cannot grant a permission you do not hold: {key}",
            )
    return None


@dataclass
class ListUsersInput:
    page: PageRequest = field(default_factory=PageRequest)
    search: str | None = None
    date_range: str | None = None


class ListUsersUseCase:
    def __init__(
        self,
        repository: UserRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.clock = clock

    def execute(self, input_data: ListUsersInput) -> PageResult[User]:
        query = Query().where(
            text_search(input_data.search, USER_SEARCH_FIELDS),
            date_range_preset(input_data.date_range, self.clock()),
        )
        total = self.repository.count(query)
        users = self.repository.list_users(query, input_data.page)
        return PageResult(
            items=users,
            total=total,
            page=input_data.page.page,
            total_pages=total_pages(total, input_data.page.limit),
        )


class GetUserUseCase:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    def execute(self, user_id: str) -> UserResult:
        user = self.repository.get_user(user_id)
        if user is None:
            return UserResult(error=not_found("User"))
        return UserResult(user=user)


@dataclass
class CreateUserInput:
    first_name: str | None
    last_name: str | None
    email: str | None
    temp_password: str | None
    actor: User | None = None
    role: Role | None = None
    position: str | None = None
    photo: str | None = None
    force_password_change: bool | None = None
    permissions: Dict[str, Any] | None = None


class CreateUserUseCase:
    """R: Create a user (managed, bootstrap or open registration)."""

    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        activities: ActivityRepository | None = None,
        allow_open_registration: bool = False,
    ):
        self.repository = repository
        self.hasher = hasher
        self.activities = activities
        self.allow_open_registration = allow_open_registration

    def execute(self, input_data: CreateUserInput) -> UserResult:
        first_name = (input_data.first_name or "").strip()
        last_name = (input_data.last_name or "").strip()
        email = (input_data.email or "").strip().lower()
        if not first_name or not last_name or not email or not input_data.temp_password:
            return UserResult(
                error=ServiceError(
                    code=ServiceErrorCode.VALIDATION_ERROR,
                    message="First name, last name, email, and password are required",
                )
            )

        actor = input_data.actor
        bootstrap = False
        if actor is None:
            if self.repository.count() == 0:
                bootstrap = True
            elif not self.allow_open_registration:
                return UserResult(
                    error=ServiceError(
                        code=ServiceErrorCode.UNAUTHORIZED,
                        message="No token, authorization denied",
                    )
                )
        elif not authorize(actor, Capability.MANAGE_USERS):
            return UserResult(
                error=ServiceError(code=ServiceErrorCode.FORBIDDEN, message="Forbidden")
            )
        else:
            denied = _grant_error(actor, input_data.role, input_data.permissions)
            if denied is not None:
                return UserResult(error=denied)

        if self.repository.get_user_by_email(email) is not None:
            return UserResult(error=_email_conflict())

        if bootstrap:
            role, permissions = Role.ADMINISTRATOR, UserPermissions.all_granted()
        elif actor is None:
            role, permissions = Role.VIEWER, UserPermissions()
        else:
            role = input_data.role or Role.VIEWER
            permissions = UserPermissions.from_dict(input_data.permissions)

        user = User(
            id=new_id(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=self.hasher.hash(input_data.temp_password),
            role=role,
            permissions=permissions,
            position=input_data.position,
            photo=input_data.photo,
            force_password_change=(
                True
                if input_data.force_password_change is None
                else input_data.force_password_change
            ),
        )

        try:
            created = self.repository.create_user(user)
        except DuplicateKeyError:
            return UserResult(error=_email_conflict())

        if bootstrap:
            logger.info("Bootstrap administrator created", extra={"subject": created.id})

        record_activity(
            self.activities,
            actor_id=actor.id if actor else created.id,
            action=ActivityAction.USER_CREATED,
            target=created.name,
            target_id=created.id,
        )
        return UserResult(user=created)


@dataclass
class UpdateUserInput:
    user_id: str
    changes: Dict[str, Any] = field(default_factory=dict)
    permissions: Dict[str, Any] | None = None
    password: str | None = None
    actor: User | None = None


class UpdateUserUseCase:
    """R: Partial update; permissions are merged, password is re-hashed."""

    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        activities: ActivityRepository | None = None,
    ):
        self.repository = repository
        self.hasher = hasher
        self.activities = activities

    def execute(self, input_data: UpdateUserInput) -> UserResult:
        changes = {
            key: value
            for key, value in input_data.changes.items()
            if key in USER_MUTABLE_FIELDS and value is not None
        }

        for key in ("first_name", "last_name"):
            if key in changes:
                changes[key] = changes[key].strip()
                if not changes[key]:
                    return UserResult(
                        error=ServiceError(
                            code=ServiceErrorCode.VALIDATION_ERROR,
                            message=f"{key.replace('_', ' ').capitalize()} cannot be empty",
                        )
                    )
        if "email" in changes:
            changes["email"] = changes["email"].strip().lower()
        if "role" in changes:
            changes["role"] = Role(changes["role"])

        if input_data.actor is not None:
            denied = _grant_error(
                input_data.actor, changes.get("role"), input_data.permissions
            )
            if denied is not None:
                return UserResult(error=denied)

        current = self.repository.get_user(input_data.user_id)
        if current is None:
            return UserResult(error=not_found("User"))

        if "email" in changes and changes["email"] != current.email:
            holder = self.repository.get_user_by_email(changes["email"])
            if holder is not None and holder.id != current.id:
                return UserResult(error=_email_conflict())

        if input_data.permissions:
            changes["permissions"] = current.permissions.merged(input_data.permissions)
        if input_data.password:
            changes["password_hash"] = self.hasher.hash(input_data.password)

        updated = replace(current, **changes)
        try:
            stored = self.repository.update_user(updated)
        except DuplicateKeyError:
            return UserResult(error=_email_conflict())
        if not stored:
            return UserResult(error=not_found("User"))

        refreshed = self.repository.get_user(current.id) or updated
        record_activity(
            self.activities,
            actor_id=input_data.actor.id if input_data.actor else None,
            action=ActivityAction.USER_UPDATED,
            target=refreshed.name,
            target_id=refreshed.id,
        )
        return UserResult(user=refreshed)


class DeleteUserUseCase:
    def __init__(
        self,
        repository: UserRepository,
        activities: ActivityRepository | None = None,
    ):
        self.repository = repository
        self.activities = activities

    def execute(self, user_id: str, actor_id: str | None = None) -> DeleteResult:
        current = self.repository.get_user(user_id)
        if current is None or not self.repository.delete_user(user_id):
            return DeleteResult(error=not_found("User"))

        record_activity(
            self.activities,
            actor_id=actor_id,
            action=ActivityAction.USER_DELETED,
            target=current.name,
            target_id=current.id,
        )
        return DeleteResult(deleted=True)


class GetSettingsUseCase:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    def execute(self, user_id: str) -> SettingsResult:
        user = self.repository.get_user(user_id)
        if user is None:
            return SettingsResult(error=not_found("User"))
        return SettingsResult(settings=user.settings)


@dataclass
class UpdateSettingsInput:
    user_id: str
    dark_mode: bool | None = None
    language: str | None = None
    timezone: str | None = None


class UpdateSettingsUseCase:
    """R: Only provided settings change; blank strings are ignored."""

    def __init__(
        self,
        repository: UserRepository,
        activities: ActivityRepository | None = None,
    ):
        self.repository = repository
        self.activities = activities

    def execute(self, input_data: UpdateSettingsInput) -> SettingsResult:
        user = self.repository.get_user(input_data.user_id)
        if user is None:
            return SettingsResult(error=not_found("User"))

        changes: Dict[str, Any] = {}
        if input_data.dark_mode is not None:
            changes["dark_mode"] = input_data.dark_mode
        if input_data.language:
            changes["language"] = input_data.language
        if input_data.timezone:
            changes["timezone"] = input_data.timezone

        settings = replace(user.settings, **changes)
        if not self.repository.update_user(replace(user, settings=settings)):
            return SettingsResult(error=not_found("User"))

        record_activity(
            self.activities,
            actor_id=user.id,
            action=ActivityAction.SETTINGS_UPDATED,
            target=user.name,
            target_id=user.id,
        )
        return SettingsResult(settings=settings)
