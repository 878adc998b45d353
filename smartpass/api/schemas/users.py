"""
Name: User, Auth and Settings HTTP Schemas

Responsibilities:
  - Request DTOs for login, password change, user create/update, settings
  - UserRes never carries the password hash
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field, field_validator

from ...domain.entities import Role, User, UserSettings
from .common import CamelModel

_POSITION_ALIASES = AliasChoices("position", "cargo")


# -----------------------------------------------------------------------------
# Auth
# -----------------------------------------------------------------------------
class LoginReq(CamelModel):
    email: str | None = None
    username: str | None = None
    password: str | None = None

    @property
    def identifier(self) -> str | None:
        return self.email or self.username


class LoginRes(CamelModel):
    token: str
    message: str = "Login successful"


class ChangePasswordReq(CamelModel):
    current_password: str | None = None
    new_password: str | None = Field(default=None, max_length=128)


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------
class PermissionsModel(CamelModel):
    """Partial capability flags; omitted keys keep their current value."""

    add_employees: bool | None = None
    edit_employees: bool | None = None
    deactivate_employees: bool | None = None
    view_employees: bool | None = None
    generate_qr_codes: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("generateQRCodes", "generate_qr_codes"),
        serialization_alias="generateQRCodes",
    )
    revoke_qr_codes: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("revokeQRCodes", "revoke_qr_codes"),
        serialization_alias="revokeQRCodes",
    )
    manage_users: bool | None = None

    def to_flags(self) -> dict:
        """R: camelCase keys of the flags that were provided."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateUserReq(CamelModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=320)
    temp_password: str | None = Field(default=None, max_length=128)
    role: Role | None = None
    position: str | None = Field(
        default=None, max_length=200, validation_alias=_POSITION_ALIASES
    )
    photo: str | None = None
    force_password_change: bool | None = None
    permissions: PermissionsModel | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.strip().lower() if v else v


class UpdateUserReq(CamelModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=320)
    photo: str | None = None
    position: str | None = Field(
        default=None, max_length=200, validation_alias=_POSITION_ALIASES
    )
    role: Role | None = None
    force_password_change: bool | None = None
    permissions: PermissionsModel | None = None
    password: str | None = Field(default=None, max_length=128)

    def to_changes(self) -> dict:
        return self.model_dump(
            exclude_unset=True, exclude={"permissions", "password"}
        )


class SettingsModel(CamelModel):
    dark_mode: bool
    language: str
    timezone: str


class UpdateSettingsReq(CamelModel):
    dark_mode: bool | None = None
    language: str | None = Field(default=None, max_length=100)
    timezone: str | None = Field(default=None, max_length=100)


class UserRes(CamelModel):
    id: str
    first_name: str
    last_name: str
    name: str
    email: str
    role: Role
    position: str | None = None
    photo: str | None = None
    permissions: dict[str, bool]
    settings: SettingsModel
    force_password_change: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserListRes(CamelModel):
    users: list[UserRes]
    total: int
    page: int
    total_pages: int


class UserUpdateRes(CamelModel):
    user: UserRes
    message: str = "User updated successfully"


def to_settings_model(settings: UserSettings) -> SettingsModel:
    return SettingsModel(
        dark_mode=settings.dark_mode,
        language=settings.language,
        timezone=settings.timezone,
    )


def to_user_res(user: User) -> UserRes:
    return UserRes(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        name=user.name,
        email=user.email,
        role=user.role,
        position=user.position,
        photo=user.photo,
        permissions=user.permissions.to_dict(),
        settings=to_settings_model(user.settings),
        force_password_change=user.force_password_change,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
