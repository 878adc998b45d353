"""
Name: Domain Repository Interfaces

Responsibilities:
  - Define contracts for users, employees and activity persistence
  - Declare the filterable field whitelist of each store

Collaborators:
  - domain.entities, domain.filters
  - Implementations in infrastructure.repositories

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Storage-agnostic (PostgreSQL or in-memory)
  - Lists are ordered by created_at descending

Notes:
  - Using typing.Protocol for structural subtyping (duck typing)
"""

from datetime import datetime
from typing import List, Literal, Optional, Protocol, Tuple

from ..pagination import PageRequest
from .entities import Activity, Employee, User
from .filters import Query

USER_FILTER_FIELDS = frozenset(
    {"id", "first_name", "last_name", "email", "role", "created_at"}
)

EMPLOYEE_FILTER_FIELDS = frozenset(
    {
        "id",
        "name",
        "email",
        "employee_id",
        "position",
        "department",
        "company",
        "status",
        "created_at",
    }
)

ACTIVITY_FILTER_FIELDS = frozenset(
    {"id", "user_id", "action", "target", "target_id", "created_at"}
)

Granularity = Literal["day", "month"]


class UserRepository(Protocol):
    """
    R: Interface for the credential store.

    Emails are stored lowercased and are unique.
    """

    def ping(self) -> bool:
        """R: True if the store is reachable."""
        ...

    def count(self, query: Query = Query()) -> int:
        ...

    def list_users(
        self, query: Query = Query(), page: Optional[PageRequest] = None
    ) -> List[User]:
        """
        R: Users matching query, newest first.

        Args:
            query: Filters (fields must be in USER_FILTER_FIELDS)
            page: Optional window; None returns every match
        """
        ...

    def get_user(self, user_id: str) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Case-insensitive lookup."""
        ...

    def create_user(self, user: User) -> User:
        """
        R: Persist a new user.

        Raises:
            DuplicateKeyError: If the email is already taken
        """
        ...

    def update_user(self, user: User) -> bool:
        """
        R: Replace stored fields of an existing user.

        Returns:
            False if the user no longer exists

        Raises:
            DuplicateKeyError: If the new email clashes with another user
        """
        ...

    def delete_user(self, user_id: str) -> bool:
        ...

    def delete_all_users(self) -> int:
        """R: Maintenance helper; returns number of rows removed."""
        ...


class EmployeeRepository(Protocol):
    """R: Interface for employee persistence."""

    def count(self, query: Query = Query()) -> int:
        ...

    def list_employees(
        self, query: Query = Query(), page: Optional[PageRequest] = None
    ) -> List[Employee]:
        ...

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        """R: Lookup by 24-hex id."""
        ...

    def get_employee_by_code(self, code: str) -> Optional[Employee]:
        """R: Lookup by the EMP###### employee code."""
        ...

    def create_employee(self, employee: Employee) -> Employee:
        ...

    def update_employee(self, employee: Employee) -> bool:
        ...

    def delete_employee(self, employee_id: str) -> bool:
        ...

    def count_created_since(
        self, since: datetime, granularity: Granularity
    ) -> List[Tuple[str, int]]:
        """
        R: Employees created at or after since, grouped by period.

        Returns:
            (period, count) pairs ascending; period is YYYY-MM-DD for
            "day" and YYYY-MM for "month" (UTC)
        """
        ...


class ActivityRepository(Protocol):
    """R: Append-only activity log."""

    def append(self, activity: Activity) -> None:
        ...

    def count(self, query: Query = Query()) -> int:
        ...

    def list_activities(
        self, query: Query = Query(), page: Optional[PageRequest] = None
    ) -> List[Activity]:
        """R: Matching records newest first, with actor populated."""
        ...
