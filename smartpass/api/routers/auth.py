"""
Name: Auth Router

Responsibilities:
  - POST /login: exchange email (or username) + password for a token
  - GET /me: current user without the password hash
  - POST /change-password: replace the caller's password

Collaborators:
  - application.use_cases: LoginUseCase, GetCurrentUserUseCase, ChangePasswordUseCase
  - identity.guard: require_user_id
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...application.use_cases import (
    ChangePasswordInput,
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    LoginInput,
    LoginUseCase,
)
from ...container import (
    get_change_password_use_case,
    get_current_user_use_case,
    get_login_use_case,
)
from ...identity.guard import require_user_id
from ..error_mapping import raise_service_error
from ..schemas.common import MessageRes
from ..schemas.users import (
    ChangePasswordReq,
    LoginReq,
    LoginRes,
    UserRes,
    to_user_res,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginRes)
def login(
    req: LoginReq,
    use_case: LoginUseCase = Depends(get_login_use_case),
):
    result = use_case.execute(LoginInput(email=req.identifier, password=req.password))
    if result.error:
        raise_service_error(result.error)
    return LoginRes(token=result.token)


@router.get("/me", response_model=UserRes)
def me(
    user_id: str = Depends(require_user_id),
    use_case: GetCurrentUserUseCase = Depends(get_current_user_use_case),
):
    result = use_case.execute(user_id)
    if result.error:
        raise_service_error(result.error)
    return to_user_res(result.user)


@router.post("/change-password", response_model=MessageRes)
def change_password(
    req: ChangePasswordReq,
    user_id: str = Depends(require_user_id),
    use_case: ChangePasswordUseCase = Depends(get_change_password_use_case),
):
    result = use_case.execute(
        ChangePasswordInput(
            user_id=user_id,
            current_password=req.current_password,
            new_password=req.new_password,
        )
    )
    if result.error:
        raise_service_error(result.error)
    return MessageRes(message="Password updated successfully")
