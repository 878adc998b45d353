"""
Name: Users Router

Responsibilities:
  - List / get users (any authenticated caller)
  - Create users (manageUsers, or bootstrap / open registration when anonymous)
  - Update / delete users (manageUsers)
  - Read and update the caller's own settings

Collaborators:
  - application.use_cases: user and settings use cases
  - identity.guard: require_user_id, optional_user_id
  - identity.permissions: require_capability

Notes:
  - /me/settings is declared before /{user_id}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from ...application.use_cases import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetSettingsUseCase,
    GetUserUseCase,
    ListUsersInput,
    ListUsersUseCase,
    UpdateSettingsInput,
    UpdateSettingsUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)
from ...container import (
    get_create_user_use_case,
    get_delete_user_use_case,
    get_get_settings_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_update_settings_use_case,
    get_update_user_use_case,
    get_user_repository,
)
from ...domain.entities import Capability, User
from ...domain.repositories import UserRepository
from ...error_responses import unauthorized
from ...identity.guard import optional_user_id, require_user_id
from ...identity.permissions import require_capability
from ...pagination import PageRequest
from ..dependencies import page_request
from ..error_mapping import raise_service_error
from ..schemas.common import MessageRes
from ..schemas.users import (
    CreateUserReq,
    SettingsModel,
    UpdateSettingsReq,
    UpdateUserReq,
    UserListRes,
    UserRes,
    UserUpdateRes,
    to_settings_model,
    to_user_res,
)

router = APIRouter(prefix="/api/users", tags=["users"])


# -----------------------------------------------------------------------------
# Own settings
# -----------------------------------------------------------------------------
@router.get("/me/settings", response_model=SettingsModel)
def get_my_settings(
    user_id: str = Depends(require_user_id),
    use_case: GetSettingsUseCase = Depends(get_get_settings_use_case),
):
    result = use_case.execute(user_id)
    if result.error:
        raise_service_error(result.error)
    return to_settings_model(result.settings)


@router.put("/me/settings", response_model=SettingsModel)
def update_my_settings(
    req: UpdateSettingsReq,
    user_id: str = Depends(require_user_id),
    use_case: UpdateSettingsUseCase = Depends(get_update_settings_use_case),
):
    result = use_case.execute(
        UpdateSettingsInput(
            user_id=user_id,
            dark_mode=req.dark_mode,
            language=req.language,
            timezone=req.timezone,
        )
    )
    if result.error:
        raise_service_error(result.error)
    return to_settings_model(result.settings)


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------
@router.get("", response_model=UserListRes)
def list_users(
    page: PageRequest = Depends(page_request),
    search: str | None = Query(None, max_length=200),
    date_range: str | None = Query(None, alias="dateRange"),
    _user_id: str = Depends(require_user_id),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    result = use_case.execute(
        ListUsersInput(page=page, search=search, date_range=date_range)
    )
    return UserListRes(
        users=[to_user_res(u) for u in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.get("/{user_id}", response_model=UserRes)
def get_user(
    user_id: str,
    _caller_id: str = Depends(require_user_id),
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    result = use_case.execute(user_id)
    if result.error:
        raise_service_error(result.error)
    return to_user_res(result.user)


@router.post("", response_model=UserRes, status_code=status.HTTP_201_CREATED)
def create_user(
    req: CreateUserReq,
    caller_id: str | None = Depends(optional_user_id),
    users: UserRepository = Depends(get_user_repository),
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
):
    """
    Create a user.

    Anonymous calls are accepted only while no user exists (the account
    becomes Administrator) or when open registration is enabled.
    """
    actor = None
    if caller_id is not None:
        actor = users.get_user(caller_id)
        if actor is None:
            raise unauthorized("User not found")

    result = use_case.execute(
        CreateUserInput(
            first_name=req.first_name,
            last_name=req.last_name,
            email=req.email,
            temp_password=req.temp_password,
            actor=actor,
            role=req.role,
            position=req.position,
            photo=req.photo,
            force_password_change=req.force_password_change,
            permissions=req.permissions.to_flags() if req.permissions else None,
        )
    )
    if result.error:
        raise_service_error(result.error)
    return to_user_res(result.user)


@router.put("/{user_id}", response_model=UserUpdateRes)
def update_user(
    user_id: str,
    req: UpdateUserReq,
    actor: User = Depends(require_capability(Capability.MANAGE_USERS)),
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
):
    result = use_case.execute(
        UpdateUserInput(
            user_id=user_id,
            changes=req.to_changes(),
            permissions=req.permissions.to_flags() if req.permissions else None,
            password=req.password,
            actor=actor,
        )
    )
    if result.error:
        raise_service_error(result.error)
    return UserUpdateRes(user=to_user_res(result.user))


@router.delete("/{user_id}", response_model=MessageRes)
def delete_user(
    user_id: str,
    actor: User = Depends(require_capability(Capability.MANAGE_USERS)),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
):
    result = use_case.execute(user_id, actor_id=actor.id)
    if result.error:
        raise_service_error(result.error)
    return MessageRes(message="User deleted successfully")
