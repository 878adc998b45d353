"""
Name: Employee HTTP Schemas

Responsibilities:
  - Request DTOs for create / partial update (position accepts "cargo")
  - Response DTOs, including the restricted public projection

Constraints:
  - Server-assigned fields (id, employeeId, qrCode) are not accepted on input
  - PublicEmployeeRes is the complete list of fields exposed without auth
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import AliasChoices, Field

from ...domain.entities import Employee, EmployeeStatus
from .common import CamelModel

_POSITION_ALIASES = AliasChoices("position", "cargo")


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateEmployeeReq(CamelModel):
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=320)
    mobile: str | None = Field(default=None, max_length=50)
    position: str | None = Field(
        default=None, max_length=200, validation_alias=_POSITION_ALIASES
    )
    department: str | None = Field(default=None, max_length=200)
    company: str | None = Field(default=None, max_length=200)
    office_location: str | None = Field(default=None, max_length=200)
    status: EmployeeStatus | None = None
    id_card_expiration_date: date | None = None
    photo: str | None = None


class UpdateEmployeeReq(CreateEmployeeReq):
    """Partial update: only keys present in the body are applied."""

    def to_changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class EmployeeRes(CamelModel):
    id: str
    name: str
    employee_id: str
    email: str | None = None
    mobile: str | None = None
    position: str | None = None
    department: str | None = None
    company: str | None = None
    office_location: str | None = None
    status: EmployeeStatus
    qr_code: str | None = None
    id_card_expiration_date: date | None = None
    photo: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EmployeeReportRow(CamelModel):
    """Employee without the QR payload (custom reports)."""

    id: str
    name: str
    employee_id: str
    email: str | None = None
    mobile: str | None = None
    position: str | None = None
    department: str | None = None
    company: str | None = None
    office_location: str | None = None
    status: EmployeeStatus
    id_card_expiration_date: date | None = None
    photo: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EmployeeListRes(CamelModel):
    employees: list[EmployeeRes]
    total: int
    page: int
    total_pages: int


class PublicEmployeeRes(CamelModel):
    name: str
    position: str | None = None
    department: str | None = None
    status: EmployeeStatus
    photo: str | None = None
    company: str | None = None
    id_card_expiration_date: date | None = None


def _employee_fields(employee: Employee) -> dict:
    return {
        "id": employee.id,
        "name": employee.name,
        "employee_id": employee.employee_id,
        "email": employee.email,
        "mobile": employee.mobile,
        "position": employee.position,
        "department": employee.department,
        "company": employee.company,
        "office_location": employee.office_location,
        "status": employee.status,
        "id_card_expiration_date": employee.id_card_expiration_date,
        "photo": employee.photo,
        "created_at": employee.created_at,
        "updated_at": employee.updated_at,
    }


def to_employee_res(employee: Employee) -> EmployeeRes:
    return EmployeeRes(**_employee_fields(employee), qr_code=employee.qr_code)


def to_report_row(employee: Employee) -> EmployeeReportRow:
    return EmployeeReportRow(**_employee_fields(employee))


def to_public_res(employee: Employee) -> PublicEmployeeRes:
    return PublicEmployeeRes(
        name=employee.name,
        position=employee.position,
        department=employee.department,
        status=employee.status,
        photo=employee.photo,
        company=employee.company,
        id_card_expiration_date=employee.id_card_expiration_date,
    )
