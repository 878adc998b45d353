"""
Name: Employees Router

Responsibilities:
  - CRUD over employees, guarded by capability flags
  - QR payload regeneration / revocation
  - Unauthenticated public lookup (restricted projection)

Collaborators:
  - application.use_cases: employee use cases
  - identity.permissions: require_capability
  - schemas.employees: DTOs

Notes:
  - /public/{slug} is declared before /{employee_id}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from ...application.use_cases import (
    CreateEmployeeInput,
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListEmployeesInput,
    ListEmployeesUseCase,
    PublicEmployeeLookupUseCase,
    RegenerateQRCodeUseCase,
    RevokeQRCodeUseCase,
    UpdateEmployeeInput,
    UpdateEmployeeUseCase,
)
from ...container import (
    get_create_employee_use_case,
    get_delete_employee_use_case,
    get_get_employee_use_case,
    get_list_employees_use_case,
    get_public_employee_lookup_use_case,
    get_regenerate_qr_code_use_case,
    get_revoke_qr_code_use_case,
    get_update_employee_use_case,
)
from ...domain.entities import Capability, User
from ...identity.permissions import require_capability
from ...pagination import PageRequest
from ..dependencies import page_request
from ..error_mapping import raise_service_error
from ..schemas.common import MessageRes
from ..schemas.employees import (
    CreateEmployeeReq,
    EmployeeListRes,
    EmployeeRes,
    PublicEmployeeRes,
    UpdateEmployeeReq,
    to_employee_res,
    to_public_res,
)

router = APIRouter(prefix="/api/employees", tags=["employees"])


@router.get("", response_model=EmployeeListRes)
def list_employees(
    page: PageRequest = Depends(page_request),
    search: str | None = Query(None, max_length=200),
    company: str | None = Query(None, max_length=200),
    status_filter: str | None = Query(None, alias="status"),
    date_range: str | None = Query(None, alias="dateRange"),
    _user: User = Depends(require_capability(Capability.VIEW_EMPLOYEES)),
    use_case: ListEmployeesUseCase = Depends(get_list_employees_use_case),
):
    result = use_case.execute(
        ListEmployeesInput(
            page=page,
            search=search,
            company=company,
            status=status_filter,
            date_range=date_range,
        )
    )
    return EmployeeListRes(
        employees=[to_employee_res(e) for e in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.get("/public/{slug}", response_model=PublicEmployeeRes)
def public_employee(
    slug: str,
    use_case: PublicEmployeeLookupUseCase = Depends(
        get_public_employee_lookup_use_case
    ),
):
    """Public ID-card view reached from the QR code. No auth."""
    result = use_case.execute(slug)
    if result.error:
        raise_service_error(result.error)
    return to_public_res(result.employee)


@router.get("/{employee_id}", response_model=EmployeeRes)
def get_employee(
    employee_id: str,
    _user: User = Depends(require_capability(Capability.VIEW_EMPLOYEES)),
    use_case: GetEmployeeUseCase = Depends(get_get_employee_use_case),
):
    result = use_case.execute(employee_id)
    if result.error:
        raise_service_error(result.error)
    return to_employee_res(result.employee)


@router.post("", response_model=EmployeeRes, status_code=status.HTTP_201_CREATED)
def create_employee(
    req: CreateEmployeeReq,
    user: User = Depends(require_capability(Capability.ADD_EMPLOYEES)),
    use_case: CreateEmployeeUseCase = Depends(get_create_employee_use_case),
):
    result = use_case.execute(
        CreateEmployeeInput(
            name=req.name,
            actor_id=user.id,
            email=req.email,
            mobile=req.mobile,
            position=req.position,
            department=req.department,
            company=req.company,
            office_location=req.office_location,
            status=req.status,
            id_card_expiration_date=req.id_card_expiration_date,
            photo=req.photo,
        )
    )
    if result.error:
        raise_service_error(result.error)
    return to_employee_res(result.employee)


@router.put("/{employee_id}", response_model=EmployeeRes)
def update_employee(
    employee_id: str,
    req: UpdateEmployeeReq,
    user: User = Depends(require_capability(Capability.EDIT_EMPLOYEES)),
    use_case: UpdateEmployeeUseCase = Depends(get_update_employee_use_case),
):
    result = use_case.execute(
        UpdateEmployeeInput(
            actor=user, employee_id=employee_id, changes=req.to_changes()
        )
    )
    if result.error:
        raise_service_error(result.error)
    return to_employee_res(result.employee)


@router.delete("/{employee_id}", response_model=MessageRes)
def delete_employee(
    employee_id: str,
    user: User = Depends(require_capability(Capability.DEACTIVATE_EMPLOYEES)),
    use_case: DeleteEmployeeUseCase = Depends(get_delete_employee_use_case),
):
    result = use_case.execute(employee_id, actor_id=user.id)
    if result.error:
        raise_service_error(result.error)
    return MessageRes(message="Deleted")


@router.post("/{employee_id}/qr", response_model=EmployeeRes)
def regenerate_qr_code(
    employee_id: str,
    user: User = Depends(require_capability(Capability.GENERATE_QR_CODES)),
    use_case: RegenerateQRCodeUseCase = Depends(get_regenerate_qr_code_use_case),
):
    result = use_case.execute(employee_id, actor_id=user.id)
    if result.error:
        raise_service_error(result.error)
    return to_employee_res(result.employee)


@router.delete("/{employee_id}/qr", response_model=EmployeeRes)
def revoke_qr_code(
    employee_id: str,
    user: User = Depends(require_capability(Capability.REVOKE_QR_CODES)),
    use_case: RevokeQRCodeUseCase = Depends(get_revoke_qr_code_use_case),
):
    result = use_case.execute(employee_id, actor_id=user.id)
    if result.error:
        raise_service_error(result.error)
    return to_employee_res(result.employee)
