"""
Name: Report and Activity HTTP Schemas
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from ...domain.entities import Activity
from .common import CamelModel
from .employees import EmployeeReportRow


class StatsRes(CamelModel):
    total_employees: int
    active_employees: int
    inactive_employees: int
    total_users: int
    timestamp: datetime


class GrowthPointRes(CamelModel):
    date: str
    employees: int


class RecentActivityRes(CamelModel):
    user: str
    name: str
    action: str
    timestamp: datetime | None = None


class CustomReportReq(CamelModel):
    status: str | None = None
    date_from: date | None = None
    date_to: date | None = None


class CustomReportSummaryRes(CamelModel):
    total: int
    active: int
    inactive: int


class CustomReportRes(CamelModel):
    summary: CustomReportSummaryRes
    results: list[EmployeeReportRow]
    filters: dict[str, Any]


class ActivityActorRes(CamelModel):
    id: str
    name: str
    photo: str | None = None


class ActivityRes(CamelModel):
    id: str
    user: ActivityActorRes | None = None
    action: str
    target: str | None = None
    target_id: str | None = None
    created_at: datetime | None = None


class ActivityListRes(CamelModel):
    logs: list[ActivityRes]
    total: int
    page: int
    total_pages: int


def to_activity_res(activity: Activity) -> ActivityRes:
    actor = None
    if activity.actor is not None:
        actor = ActivityActorRes(
            id=activity.actor.id, name=activity.actor.name, photo=activity.actor.photo
        )
    return ActivityRes(
        id=activity.id,
        user=actor,
        action=activity.action,
        target=activity.target,
        target_id=activity.target_id,
        created_at=activity.created_at,
    )
