"""
Name: Activity Router

Responsibilities:
  - Paginated activity log
  - CSV export (attachment)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from ...application.use_cases import (
    ExportActivityUseCase,
    ListActivityInput,
    ListActivityUseCase,
)
from ...container import get_export_activity_use_case, get_list_activity_use_case
from ...identity.guard import require_user_id
from ...pagination import PageRequest
from ..dependencies import page_request
from ..schemas.reports import ActivityListRes, to_activity_res

EXPORT_FILENAME = "activity-log.csv"

router = APIRouter(
    prefix="/api/activity",
    tags=["activity"],
    dependencies=[Depends(require_user_id)],
)


@router.get("", response_model=ActivityListRes)
def list_activity(
    page: PageRequest = Depends(page_request),
    search: str | None = Query(None, max_length=200),
    action: str | None = Query(None, max_length=100),
    date_range: str | None = Query(None, alias="dateRange"),
    use_case: ListActivityUseCase = Depends(get_list_activity_use_case),
):
    result = use_case.execute(
        ListActivityInput(
            page=page, search=search, action=action, date_range=date_range
        )
    )
    return ActivityListRes(
        logs=[to_activity_res(a) for a in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.get("/export")
def export_activity(
    use_case: ExportActivityUseCase = Depends(get_export_activity_use_case),
):
    return Response(
        content=use_case.execute(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
