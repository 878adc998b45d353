"""
Name: Reports Router

Responsibilities:
  - Headline stats, growth series, recent additions and custom reports

Collaborators:
  - application.use_cases: report use cases
  - identity.guard: require_user_id
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from ...application.use_cases import (
    CustomReportInput,
    CustomReportUseCase,
    GetGrowthUseCase,
    GetRecentActivityUseCase,
    GetStatsUseCase,
)
from ...container import (
    get_custom_report_use_case,
    get_growth_use_case,
    get_recent_activity_use_case,
    get_stats_use_case,
)
from ...identity.guard import require_user_id
from ...pagination import MAX_LIMIT
from ..schemas.employees import to_report_row
from ..schemas.reports import (
    CustomReportReq,
    CustomReportRes,
    CustomReportSummaryRes,
    GrowthPointRes,
    RecentActivityRes,
    StatsRes,
)

router = APIRouter(
    prefix="/api/reports",
    tags=["reports"],
    dependencies=[Depends(require_user_id)],
)


@router.get("/stats", response_model=StatsRes)
def stats(use_case: GetStatsUseCase = Depends(get_stats_use_case)):
    report = use_case.execute()
    return StatsRes(
        total_employees=report.total_employees,
        active_employees=report.active_employees,
        inactive_employees=report.inactive_employees,
        total_users=report.total_users,
        timestamp=report.timestamp,
    )


@router.get("/growth", response_model=List[GrowthPointRes])
def growth(
    range_name: str | None = Query(None, alias="range"),
    use_case: GetGrowthUseCase = Depends(get_growth_use_case),
):
    return [
        GrowthPointRes(date=point.date, employees=point.employees)
        for point in use_case.execute(range_name)
    ]


@router.get("/activity", response_model=List[RecentActivityRes])
def recent_activity(
    limit: int = Query(10, ge=1, le=MAX_LIMIT),
    use_case: GetRecentActivityUseCase = Depends(get_recent_activity_use_case),
):
    return [
        RecentActivityRes(
            user=item.user, name=item.name, action=item.action, timestamp=item.timestamp
        )
        for item in use_case.execute(limit)
    ]


@router.post("/custom", response_model=CustomReportRes)
def custom_report(
    req: CustomReportReq,
    use_case: CustomReportUseCase = Depends(get_custom_report_use_case),
):
    report = use_case.execute(
        CustomReportInput(
            status=req.status, date_from=req.date_from, date_to=req.date_to
        )
    )
    return CustomReportRes(
        summary=CustomReportSummaryRes(
            total=report.summary.total,
            active=report.summary.active,
            inactive=report.summary.inactive,
        ),
        results=[to_report_row(e) for e in report.results],
        filters=req.model_dump(by_alias=True, exclude_unset=True, mode="json"),
    )
