"""
Name: Employee Use Cases

Responsibilities:
  - List (search, filters, dateRange presets, pagination)
  - Get, create, partially update and delete employees
  - Regenerate / revoke the QR payload
  - Public lookup by id or employee code

Collaborators:
  - domain.repositories.EmployeeRepository, ActivityRepository
  - domain.services.QRCodeGenerator
  - domain.access_policy: field-level rule for status changes

Constraints:
  - id and employee_id are assigned once at creation and never change
  - Only EMPLOYEE_MUTABLE_FIELDS are applied on update
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional

from ...domain.access_policy import authorize
from ...domain.entities import (
    DEFAULT_EMPLOYEE_PHOTO,
    EMPLOYEE_MUTABLE_FIELDS,
    ActivityAction,
    Capability,
    Employee,
    EmployeeStatus,
    User,
    employee_code,
    is_hex_id,
    new_id,
    utcnow,
)
from ...domain.filters import Query, date_range_preset, equals, text_search
from ...domain.repositories import ActivityRepository, EmployeeRepository
from ...domain.services import QRCodeGenerator
from ...pagination import PageRequest, total_pages
from ..activity_log import record_activity
from .results import (
    DeleteResult,
    EmployeeResult,
    PageResult,
    ServiceError,
    ServiceErrorCode,
    not_found,
)

EMPLOYEE_SEARCH_FIELDS = (
    "name",
    "email",
    "employee_id",
    "position",
    "department",
    "company",
)

# R: "All" is the UI's "no status filter" choice
ALL_STATUSES = "All"


def _status_filter(status: Optional[str]) -> Optional[str]:
    if not status or status == ALL_STATUSES:
        return None
    return status


@dataclass
class ListEmployeesInput:
    page: PageRequest = field(default_factory=PageRequest)
    search: str | None = None
    company: str | None = None
    status: str | None = None
    date_range: str | None = None


class ListEmployeesUseCase:
    """R: Paginated employee listing, newest first."""

    def __init__(
        self,
        repository: EmployeeRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.clock = clock

    def execute(self, input_data: ListEmployeesInput) -> PageResult[Employee]:
        query = Query().where(
            text_search(input_data.search, EMPLOYEE_SEARCH_FIELDS),
            equals("company", input_data.company),
            equals("status", _status_filter(input_data.status)),
            date_range_preset(input_data.date_range, self.clock()),
        )
        total = self.repository.count(query)
        employees = self.repository.list_employees(query, input_data.page)
        return PageResult(
            items=employees,
            total=total,
            page=input_data.page.page,
            total_pages=total_pages(total, input_data.page.limit),
        )


class GetEmployeeUseCase:
    def __init__(self, repository: EmployeeRepository):
        self.repository = repository

    def execute(self, employee_id: str) -> EmployeeResult:
        employee = self.repository.get_employee(employee_id)
        if employee is None:
            return EmployeeResult(error=not_found("Employee"))
        return EmployeeResult(employee=employee)


@dataclass
class CreateEmployeeInput:
    name: str | None
    actor_id: str | None = None
    email: str | None = None
    mobile: str | None = None
    position: str | None = None
    department: str | None = None
    company: str | None = None
    office_location: str | None = None
    status: EmployeeStatus | None = None
    id_card_expiration_date: date | None = None
    photo: str | None = None


class CreateEmployeeUseCase:
    """R: Create an employee with server-assigned id, code and QR payload."""

    def __init__(
        self,
        repository: EmployeeRepository,
        qr_codes: QRCodeGenerator,
        activities: ActivityRepository | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.qr_codes = qr_codes
        self.activities = activities
        self.clock = clock

    def execute(self, input_data: CreateEmployeeInput) -> EmployeeResult:
        name = (input_data.name or "").strip()
        if not name:
            return EmployeeResult(
                error=ServiceError(
                    code=ServiceErrorCode.VALIDATION_ERROR,
                    message="Name is required",
                )
            )

        now = self.clock()
        employee_pk = new_id()
        employee = Employee(
            id=employee_pk,
            name=name,
            employee_id=employee_code(now),
            email=input_data.email,
            mobile=input_data.mobile,
            position=input_data.position,
            department=input_data.department,
            company=input_data.company,
            office_location=input_data.office_location,
            status=input_data.status or EmployeeStatus.ACTIVE,
            qr_code=self.qr_codes.generate(employee_pk),
            id_card_expiration_date=input_data.id_card_expiration_date,
            photo=input_data.photo or DEFAULT_EMPLOYEE_PHOTO,
            created_at=now,
            updated_at=now,
        )
        created = self.repository.create_employee(employee)

        record_activity(
            self.activities,
            actor_id=input_data.actor_id,
            action=ActivityAction.EMPLOYEE_ADDED,
            target=created.name,
            target_id=created.id,
        )
        return EmployeeResult(employee=created)


@dataclass
class UpdateEmployeeInput:
    actor: User
    employee_id: str
    changes: Dict[str, Any] = field(default_factory=dict)


class UpdateEmployeeUseCase:
    """
    R: Partial update of whitelisted fields.

    Changing status additionally requires deactivateEmployees.
    """

    def __init__(
        self,
        repository: EmployeeRepository,
        activities: ActivityRepository | None = None,
    ):
        self.repository = repository
        self.activities = activities

    def execute(self, input_data: UpdateEmployeeInput) -> EmployeeResult:
        changes = {
            key: value
            for key, value in input_data.changes.items()
            if key in EMPLOYEE_MUTABLE_FIELDS
        }

        if "name" in changes:
            changes["name"] = (changes["name"] or "").strip()
            if not changes["name"]:
                return EmployeeResult(
                    error=ServiceError(
                        code=ServiceErrorCode.VALIDATION_ERROR,
                        message="Name cannot be empty",
                    )
                )
        if "status" in changes:
            if changes["status"] is None:
                changes.pop("status")
            else:
                changes["status"] = EmployeeStatus(changes["status"])
        if "photo" in changes and not changes["photo"]:
            changes["photo"] = DEFAULT_EMPLOYEE_PHOTO

        current = self.repository.get_employee(input_data.employee_id)
        if current is None:
            return EmployeeResult(error=not_found("Employee"))

        new_status = changes.get("status")
        if (
            new_status is not None
            and new_status != current.status
            and not authorize(input_data.actor, Capability.DEACTIVATE_EMPLOYEES)
        ):
            return EmployeeResult(
                error=ServiceError(
                    code=ServiceErrorCode.FORBIDDEN,
                    message="Forbidden",
                )
            )

        updated = replace(current, **changes)
        if not self.repository.update_employee(updated):
            return EmployeeResult(error=not_found("Employee"))

        refreshed = self.repository.get_employee(current.id) or updated
        record_activity(
            self.activities,
            actor_id=input_data.actor.id,
            action=ActivityAction.EMPLOYEE_UPDATED,
            target=refreshed.name,
            target_id=refreshed.id,
        )
        return EmployeeResult(employee=refreshed)


class DeleteEmployeeUseCase:
    def __init__(
        self,
        repository: EmployeeRepository,
        activities: ActivityRepository | None = None,
    ):
        self.repository = repository
        self.activities = activities

    def execute(self, employee_id: str, actor_id: str | None = None) -> DeleteResult:
        current = self.repository.get_employee(employee_id)
        if current is None or not self.repository.delete_employee(employee_id):
            return DeleteResult(error=not_found("Employee"))

        record_activity(
            self.activities,
            actor_id=actor_id,
            action=ActivityAction.EMPLOYEE_DELETED,
            target=current.name,
            target_id=current.id,
        )
        return DeleteResult(deleted=True)


class RegenerateQRCodeUseCase:
    """R: Re-render the QR payload of an employee."""

    def __init__(
        self,
        repository: EmployeeRepository,
        qr_codes: QRCodeGenerator,
        activities: ActivityRepository | None = None,
    ):
        self.repository = repository
        self.qr_codes = qr_codes
        self.activities = activities

    def execute(self, employee_id: str, actor_id: str | None = None) -> EmployeeResult:
        current = self.repository.get_employee(employee_id)
        if current is None:
            return EmployeeResult(error=not_found("Employee"))

        updated = replace(current, qr_code=self.qr_codes.generate(current.id))
        if not self.repository.update_employee(updated):
            return EmployeeResult(error=not_found("Employee"))

        record_activity(
            self.activities,
            actor_id=actor_id,
            action=ActivityAction.QR_CODE_GENERATED,
            target=current.name,
            target_id=current.id,
        )
        return EmployeeResult(employee=updated)


class RevokeQRCodeUseCase:
    """R: Clear the QR payload; the public page stays reachable by code."""

    def __init__(
        self,
        repository: EmployeeRepository,
        activities: ActivityRepository | None = None,
    ):
        self.repository = repository
        self.activities = activities

    def execute(self, employee_id: str, actor_id: str | None = None) -> EmployeeResult:
        current = self.repository.get_employee(employee_id)
        if current is None:
            return EmployeeResult(error=not_found("Employee"))

        updated = replace(current, qr_code=None)
        if not self.repository.update_employee(updated):
            return EmployeeResult(error=not_found("Employee"))

        record_activity(
            self.activities,
            actor_id=actor_id,
            action=ActivityAction.QR_CODE_REVOKED,
            target=current.name,
            target_id=current.id,
        )
        return EmployeeResult(employee=updated)


class PublicEmployeeLookupUseCase:
    """
    R: Resolve a public slug to an employee.

    A 24-hex slug is tried as an id first; any miss falls back to the
    employee code.
    """

    def __init__(self, repository: EmployeeRepository):
        self.repository = repository

    def execute(self, slug: str) -> EmployeeResult:
        slug = (slug or "").strip()
        employee = None
        if is_hex_id(slug):
            employee = self.repository.get_employee(slug.lower())
        if employee is None and slug:
            employee = self.repository.get_employee_by_code(slug)
        if employee is None:
            return EmployeeResult(error=not_found("Employee"))
        return EmployeeResult(employee=employee)
