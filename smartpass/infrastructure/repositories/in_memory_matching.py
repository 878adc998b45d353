"""
Name: In-Memory Filter Matching

Responsibilities:
  - Evaluate a domain Query against plain entity objects
  - Shared ordering/pagination helpers for in-memory repositories

Constraints:
  - Same semantics as the SQL compiler (case-insensitive literal search,
    half-open date ranges, empty OneOf matches nothing)
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, FrozenSet, List, Optional, TypeVar

from ...domain.filters import DateRange, Equals, OneOf, Query, TextSearch
from ...pagination import PageRequest

T = TypeVar("T")

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def compile_predicate(query: Query, allowed: FrozenSet[str]) -> Callable[[Any], bool]:
    """
    R: Turn a Query into a callable(entity) -> bool.

    Raises:
        InvalidFilterField: If a predicate names a non-whitelisted field
    """
    query.validate(allowed)
    predicates = query.predicates

    def matches(entity: Any) -> bool:
        for predicate in predicates:
            if isinstance(predicate, TextSearch):
                needle = predicate.term.casefold()
                if not any(
                    needle in str(_plain(getattr(entity, name, None)) or "").casefold()
                    for name in predicate.fields
                ):
                    return False
            elif isinstance(predicate, Equals):
                if _plain(getattr(entity, predicate.field, None)) != _plain(
                    predicate.value
                ):
                    return False
            elif isinstance(predicate, OneOf):
                wanted = {_plain(v) for v in predicate.values}
                if _plain(getattr(entity, predicate.field, None)) not in wanted:
                    return False
            elif isinstance(predicate, DateRange):
                value: Optional[datetime] = getattr(entity, predicate.field, None)
                if value is None:
                    return False
                if predicate.start is not None and value < predicate.start:
                    return False
                if predicate.end is not None and value >= predicate.end:
                    return False
            else:
                raise TypeError(f"Unsupported predicate: {predicate!r}")
        return True

    return matches


def newest_first(items: List[T]) -> List[T]:
    """R: ORDER BY created_at DESC, id DESC."""
    return sorted(
        items,
        key=lambda item: (getattr(item, "created_at", None) or _OLDEST, item.id),
        reverse=True,
    )


def page_slice(items: List[T], page: Optional[PageRequest]) -> List[T]:
    if page is None:
        return items
    return items[page.offset : page.offset + page.limit]
