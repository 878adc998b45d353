"""
Name: Typed Query Filters

Responsibilities:
  - Express list filters as named predicates (TextSearch, Equals, OneOf,
    DateRange) composed into a Query
  - Resolve dateRange presets into concrete start instants
  - Reject predicates on fields a repository does not expose

Collaborators:
  - application.use_cases: build Query objects from request parameters
  - infrastructure.repositories.sql_filters: compiles Query -> SQL WHERE
  - infrastructure.repositories.in_memory_matching: compiles Query -> predicate

Constraints:
  - Pure data; no store syntax lives here
  - Search terms are literal text (no pattern language leaks through)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional, Tuple, Union


class InvalidFilterField(ValueError):
    """Raised when a predicate targets a field outside the whitelist."""


@dataclass(frozen=True)
class TextSearch:
    """Case-insensitive substring match on any of ``fields``."""

    term: str
    fields: Tuple[str, ...]


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True)
class OneOf:
    """Field value is in ``values``; an empty tuple matches nothing."""

    field: str
    values: Tuple[Any, ...]


@dataclass(frozen=True)
class DateRange:
    """start <= field < end; either bound may be open."""

    field: str = "created_at"
    start: Optional[datetime] = None
    end: Optional[datetime] = None


Predicate = Union[TextSearch, Equals, OneOf, DateRange]


def created_after(start: datetime) -> DateRange:
    return DateRange(field="created_at", start=start)


def text_search(term: Optional[str], fields: Iterable[str]) -> Optional[TextSearch]:
    """R: None for blank terms so callers can pass raw query params."""
    if term is None or not term.strip():
        return None
    return TextSearch(term=term.strip(), fields=tuple(fields))


def equals(field: str, value: Any) -> Optional[Equals]:
    if value is None or value == "":
        return None
    return Equals(field=field, value=value)


@dataclass(frozen=True)
class Query:
    """Conjunction of predicates (all must match)."""

    predicates: Tuple[Predicate, ...] = ()

    def where(self, *predicates: Optional[Predicate]) -> "Query":
        """R: Return a new Query with non-None predicates appended."""
        added = tuple(p for p in predicates if p is not None)
        return Query(self.predicates + added)

    def referenced_fields(self) -> FrozenSet[str]:
        names = set()
        for predicate in self.predicates:
            if isinstance(predicate, TextSearch):
                names.update(predicate.fields)
            else:
                names.add(predicate.field)
        return frozenset(names)

    def validate(self, allowed: FrozenSet[str]) -> "Query":
        unknown = self.referenced_fields() - allowed
        if unknown:
            raise InvalidFilterField(
                f"Unsupported filter field(s): {', '.join(sorted(unknown))}"
            )
        return self


class DateRangePreset(str, Enum):
    LAST_7_DAYS = "Last 7 Days"
    LAST_30_DAYS = "Last 30 Days"
    ALL_TIME = "All Time"


_PRESET_DAYS = {
    DateRangePreset.LAST_7_DAYS: 7,
    DateRangePreset.LAST_30_DAYS: 30,
}


def preset_start(preset: Optional[str], now: datetime) -> Optional[datetime]:
    """
    R: Start instant for a dateRange preset.

    Unknown or missing presets and "All Time" mean no lower bound.
    """
    if not preset:
        return None
    try:
        days = _PRESET_DAYS.get(DateRangePreset(preset))
    except ValueError:
        return None
    if days is None:
        return None
    return now - timedelta(days=days)


def date_range_preset(preset: Optional[str], now: datetime) -> Optional[DateRange]:
    start = preset_start(preset, now)
    return created_after(start) if start is not None else None
