"""
Name: Activity Log Use Cases

Responsibilities:
  - Paginated activity listing (actor name search, action, dateRange)
  - CSV export of the whole log, newest first

Collaborators:
  - domain.repositories.ActivityRepository, UserRepository
"""

import csv
import io
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List

from ...domain.entities import Activity, utcnow
from ...domain.filters import OneOf, Query, date_range_preset, equals, text_search
from ...domain.repositories import ActivityRepository, UserRepository
from ...pagination import PageRequest, total_pages
from .results import PageResult

ACTOR_SEARCH_FIELDS = ("first_name", "last_name")
CSV_HEADER = ("User", "Action", "Target", "Date")


@dataclass
class ListActivityInput:
    page: PageRequest = field(default_factory=PageRequest)
    search: str | None = None
    action: str | None = None
    date_range: str | None = None


class ListActivityUseCase:
    """R: Actor search resolves matching users first, then filters by their ids."""

    def __init__(
        self,
        activities: ActivityRepository,
        users: UserRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.activities = activities
        self.users = users
        self.clock = clock

    def execute(self, input_data: ListActivityInput) -> PageResult[Activity]:
        query = Query().where(
            equals("action", input_data.action),
            date_range_preset(input_data.date_range, self.clock()),
        )

        name_search = text_search(input_data.search, ACTOR_SEARCH_FIELDS)
        if name_search is not None:
            actors = self.users.list_users(Query().where(name_search))
            query = query.where(OneOf("user_id", tuple(u.id for u in actors)))

        total = self.activities.count(query)
        logs = self.activities.list_activities(query, input_data.page)
        return PageResult(
            items=logs,
            total=total,
            page=input_data.page.page,
            total_pages=total_pages(total, input_data.page.limit),
        )


def render_activity_csv(activities: List[Activity]) -> str:
    """R: User, Action, Target, Date columns; missing actors render empty."""
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(CSV_HEADER)
    for activity in activities:
        writer.writerow(
            (
                activity.actor.name if activity.actor else "",
                activity.action,
                activity.target or "",
                activity.created_at.isoformat() if activity.created_at else "",
            )
        )
    return buf.getvalue()


class ExportActivityUseCase:
    def __init__(self, activities: ActivityRepository):
        self.activities = activities

    def execute(self) -> str:
        return render_activity_csv(self.activities.list_activities(Query()))
