"""Domain layer exports"""

from .entities import (
    Activity,
    ActivityAction,
    Capability,
    Employee,
    EmployeeStatus,
    Role,
    User,
    UserPermissions,
    UserSettings,
)
from .filters import Query
from .repositories import ActivityRepository, EmployeeRepository, UserRepository

__all__ = [
    "Activity",
    "ActivityAction",
    "Capability",
    "Employee",
    "EmployeeStatus",
    "Role",
    "User",
    "UserPermissions",
    "UserSettings",
    "Query",
    "ActivityRepository",
    "EmployeeRepository",
    "UserRepository",
]
