"""
Name: Use Case Results

Responsibilities:
  - Provide consistent error/result types for all use cases
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, TypeVar

from ...domain.entities import Employee, User, UserSettings

T = TypeVar("T")


class ServiceErrorCode(str, Enum):
    """R: Error codes returned by use cases (mapped to HTTP in the API)."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass
class ServiceError:
    code: ServiceErrorCode
    message: str
    resource: str | None = None


@dataclass
class PageResult(Generic[T]):
    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0


@dataclass
class EmployeeResult:
    employee: Employee | None = None
    error: ServiceError | None = None


@dataclass
class UserResult:
    user: User | None = None
    error: ServiceError | None = None


@dataclass
class SettingsResult:
    settings: UserSettings | None = None
    error: ServiceError | None = None


@dataclass
class DeleteResult:
    deleted: bool = False
    error: ServiceError | None = None


@dataclass
class LoginResult:
    token: str | None = None
    error: ServiceError | None = None


def not_found(resource: str) -> ServiceError:
    return ServiceError(
        code=ServiceErrorCode.NOT_FOUND,
        message=f"{resource} not found",
        resource=resource,
    )
