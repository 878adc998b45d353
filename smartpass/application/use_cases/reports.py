"""
Name: Report Use Cases

Responsibilities:
  - Headline counters (employees by status, users)
  - Employee growth series per day or month
  - Recent employee additions feed
  - Custom employee report (status + inclusive date window)

Collaborators:
  - domain.repositories.EmployeeRepository, UserRepository
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, List

from ...domain.entities import Employee, EmployeeStatus, utcnow
from ...domain.filters import DateRange, Query, equals
from ...domain.repositories import EmployeeRepository, Granularity, UserRepository
from ...pagination import PageRequest

GROWTH_RANGES = ("7days", "30days", "quarter")
DEFAULT_GROWTH_RANGE = "30days"
SYSTEM_ACTOR = "System/Admin"


@dataclass
class StatsReport:
    total_employees: int
    active_employees: int
    inactive_employees: int
    total_users: int
    timestamp: datetime


class GetStatsUseCase:
    def __init__(
        self,
        employees: EmployeeRepository,
        users: UserRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.employees = employees
        self.users = users
        self.clock = clock

    def execute(self) -> StatsReport:
        return StatsReport(
            total_employees=self.employees.count(),
            active_employees=self.employees.count(
                Query().where(equals("status", EmployeeStatus.ACTIVE))
            ),
            inactive_employees=self.employees.count(
                Query().where(equals("status", EmployeeStatus.INACTIVE))
            ),
            total_users=self.users.count(),
            timestamp=self.clock(),
        )


@dataclass
class GrowthPoint:
    date: str
    employees: int


def _months_ago(moment: datetime, months: int) -> datetime:
    """R: Calendar month arithmetic, clamping the day (Mar 31 -> Dec 31)."""
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = moment.day
    while day > 28:
        try:
            return moment.replace(year=year, month=month, day=day)
        except ValueError:
            day -= 1
    return moment.replace(year=year, month=month, day=day)


def growth_window(range_name: str | None, now: datetime) -> tuple[datetime, Granularity]:
    """R: Start instant and bucket size; unknown ranges mean 30 days."""
    if range_name == "7days":
        return now - timedelta(days=7), "day"
    if range_name == "quarter":
        return _months_ago(now, 3), "month"
    return now - timedelta(days=30), "day"


class GetGrowthUseCase:
    def __init__(
        self,
        employees: EmployeeRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.employees = employees
        self.clock = clock

    def execute(self, range_name: str | None = None) -> List[GrowthPoint]:
        since, granularity = growth_window(range_name, self.clock())
        return [
            GrowthPoint(date=period, employees=total)
            for period, total in self.employees.count_created_since(since, granularity)
        ]


@dataclass
class RecentAddition:
    user: str
    name: str
    action: str
    timestamp: datetime | None


class GetRecentActivityUseCase:
    """R: Latest employee creations, newest first."""

    def __init__(self, employees: EmployeeRepository):
        self.employees = employees

    def execute(self, limit: int = 10) -> List[RecentAddition]:
        recent = self.employees.list_employees(Query(), PageRequest(page=1, limit=limit))
        return [
            RecentAddition(
                user=SYSTEM_ACTOR,
                name=employee.name,
                action=f"New Employee Added: {employee.name}",
                timestamp=employee.created_at,
            )
            for employee in recent
        ]


@dataclass
class CustomReportInput:
    status: str | None = None
    date_from: date | None = None
    date_to: date | None = None


@dataclass
class CustomReportSummary:
    total: int
    active: int
    inactive: int


@dataclass
class CustomReport:
    summary: CustomReportSummary
    results: List[Employee] = field(default_factory=list)


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class CustomReportUseCase:
    """
    R: Filter employees by status and creation window.

    "All" (or no status) disables the status filter; date_to includes the
    whole day.
    """

    def __init__(self, employees: EmployeeRepository):
        self.employees = employees

    def execute(self, input_data: CustomReportInput) -> CustomReport:
        query = Query()
        if input_data.status and input_data.status != "All":
            query = query.where(equals("status", input_data.status))

        if input_data.date_from or input_data.date_to:
            query = query.where(
                DateRange(
                    field="created_at",
                    start=_start_of_day(input_data.date_from)
                    if input_data.date_from
                    else None,
                    end=_start_of_day(input_data.date_to + timedelta(days=1))
                    if input_data.date_to
                    else None,
                )
            )

        results = self.employees.list_employees(query)
        active = sum(1 for e in results if e.status == EmployeeStatus.ACTIVE)
        return CustomReport(
            summary=CustomReportSummary(
                total=len(results), active=active, inactive=len(results) - active
            ),
            results=results,
        )
