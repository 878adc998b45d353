"""
Name: Domain Entities

Responsibilities:
  - Define core entities (User, Employee, Activity)
  - Own defaults for permissions, settings and employee records
  - Generate identifiers (24-hex ids, EMP employee codes)

Collaborators:
  - None (pure domain layer, no external dependencies)

Constraints:
  - No dependencies on infrastructure or frameworks
  - Simple dataclasses (mutability not enforced)
  - Never expose password_hash outside the identity flows

Notes:
  - ids are 12 bytes rendered as 24 lowercase hex chars: a 4-byte creation
    timestamp followed by 8 random bytes, so they sort roughly by creation
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

DEFAULT_EMPLOYEE_PHOTO = "https://via.placeholder.com/150"
DEFAULT_LANGUAGE = "English (United States)"
DEFAULT_TIMEZONE = "(GMT+01:00) West Africa Time (Luanda)"

HEX_ID_LENGTH = 24
_HEX_CHARS = frozenset("0123456789abcdef")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    """R: 24-hex identifier (timestamp prefix + random suffix)."""
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_hex_id(value: str) -> bool:
    """R: True when value has the shape of an entity id."""
    return (
        isinstance(value, str)
        and len(value) == HEX_ID_LENGTH
        and set(value.lower()) <= _HEX_CHARS
    )


def employee_code(created_at: datetime) -> str:
    """R: EMP + last six digits of the creation time in epoch milliseconds."""
    millis = int(created_at.timestamp() * 1000)
    return f"EMP{str(millis)[-6:]}"


class Role(str, Enum):
    """R: Supported user roles."""

    ADMINISTRATOR = "Administrator"
    MANAGER = "Manager"
    VIEWER = "Viewer"


class Capability(str, Enum):
    """R: Named capability flags (values match the stored permission keys)."""

    ADD_EMPLOYEES = "addEmployees"
    EDIT_EMPLOYEES = "editEmployees"
    DEACTIVATE_EMPLOYEES = "deactivateEmployees"
    VIEW_EMPLOYEES = "viewEmployees"
    GENERATE_QR_CODES = "generateQRCodes"
    REVOKE_QR_CODES = "revokeQRCodes"
    MANAGE_USERS = "manageUsers"


_CAPABILITY_ATTRS = {
    Capability.ADD_EMPLOYEES: "add_employees",
    Capability.EDIT_EMPLOYEES: "edit_employees",
    Capability.DEACTIVATE_EMPLOYEES: "deactivate_employees",
    Capability.VIEW_EMPLOYEES: "view_employees",
    Capability.GENERATE_QR_CODES: "generate_qr_codes",
    Capability.REVOKE_QR_CODES: "revoke_qr_codes",
    Capability.MANAGE_USERS: "manage_users",
}


@dataclass(frozen=True)
class UserPermissions:
    """
    R: Per-user capability flags.

    Only view_employees is granted by default.
    """

    add_employees: bool = False
    edit_employees: bool = False
    deactivate_employees: bool = False
    view_employees: bool = True
    generate_qr_codes: bool = False
    revoke_qr_codes: bool = False
    manage_users: bool = False

    @classmethod
    def all_granted(cls) -> "UserPermissions":
        return cls(**{f.name: True for f in fields(cls)})

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "UserPermissions":
        """Build from camelCase keys; unknown keys are ignored."""
        return cls().merged(data or {})

    def allows(self, capability: Capability) -> bool:
        return bool(getattr(self, _CAPABILITY_ATTRS[Capability(capability)]))

    def merged(self, updates: Dict[str, Any]) -> "UserPermissions":
        """R: Overlay provided camelCase flags onto the current ones."""
        changes = {}
        for key, value in updates.items():
            try:
                capability = Capability(key)
            except ValueError:
                continue
            if value is not None:
                changes[_CAPABILITY_ATTRS[capability]] = bool(value)
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, bool]:
        return {cap.value: self.allows(cap) for cap in Capability}


@dataclass(frozen=True)
class UserSettings:
    """R: Per-user UI preferences."""

    dark_mode: bool = False
    language: str = DEFAULT_LANGUAGE
    timezone: str = DEFAULT_TIMEZONE

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "UserSettings":
        data = data or {}
        defaults = cls()
        return cls(
            dark_mode=bool(data.get("darkMode", defaults.dark_mode)),
            language=data.get("language") or defaults.language,
            timezone=data.get("timezone") or defaults.timezone,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "darkMode": self.dark_mode,
            "language": self.language,
            "timezone": self.timezone,
        }


@dataclass
class User:
    """
    R: Account allowed to sign in and operate on employees.

    Attributes:
        id: 24-hex identifier
        first_name, last_name: Display name parts
        email: Unique, stored lowercased
        password_hash: bcrypt hash (never serialized to clients)
        role: Administrator | Manager | Viewer
        permissions: Capability flags
        settings: UI preferences
        position: Job title (optional)
        photo: Avatar URL (optional)
        force_password_change: True until the user sets their own password
    """

    id: str
    first_name: str
    last_name: str
    email: str
    password_hash: str
    role: Role = Role.VIEWER
    permissions: UserPermissions = field(default_factory=UserPermissions)
    settings: UserSettings = field(default_factory=UserSettings)
    position: Optional[str] = None
    photo: Optional[str] = None
    force_password_change: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


@dataclass
class Employee:
    """R: Card holder record (no relation to User)."""

    id: str
    name: str
    employee_id: str
    email: Optional[str] = None
    mobile: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    company: Optional[str] = None
    office_location: Optional[str] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    qr_code: Optional[str] = None
    id_card_expiration_date: Optional[date] = None
    photo: str = DEFAULT_EMPLOYEE_PHOTO
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# R: Employee attributes a client may change through an update
EMPLOYEE_MUTABLE_FIELDS = (
    "name",
    "email",
    "mobile",
    "position",
    "department",
    "company",
    "office_location",
    "status",
    "id_card_expiration_date",
    "photo",
)


class ActivityAction(str, Enum):
    """R: Labels written to the activity log by mutating operations."""

    EMPLOYEE_ADDED = "Employee Added"
    EMPLOYEE_UPDATED = "Employee Updated"
    EMPLOYEE_DELETED = "Employee Deleted"
    QR_CODE_GENERATED = "QR Code Generated"
    QR_CODE_REVOKED = "QR Code Revoked"
    USER_CREATED = "User Created"
    USER_UPDATED = "User Updated"
    USER_DELETED = "User Deleted"
    SETTINGS_UPDATED = "Settings Updated"
    PASSWORD_CHANGED = "Password Changed"


@dataclass(frozen=True)
class ActivityActor:
    """R: Read-side projection of the acting user."""

    id: str
    name: str
    photo: Optional[str] = None


@dataclass
class Activity:
    """
    R: Append-only audit record.

    actor is populated on reads when the acting user still exists.
    """

    id: str
    user_id: Optional[str]
    action: str
    target: Optional[str] = None
    target_id: Optional[str] = None
    created_at: Optional[datetime] = None
    actor: Optional[ActivityActor] = None
