"""
Name: SQL Filter Compiler

Responsibilities:
  - Compile a domain Query into a parameterized WHERE clause

Collaborators:
  - domain.filters: predicate types
  - postgres_*_repo: consume (clause, params)

Constraints:
  - Field names are checked against the repository whitelist before they
    are interpolated as column names; values always travel as parameters
  - Search terms are literal: LIKE wildcards in user input are escaped
"""

from __future__ import annotations

from enum import Enum
from typing import Any, FrozenSet, List, Tuple

from ...domain.filters import DateRange, Equals, OneOf, Query, TextSearch


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def compile_where(
    query: Query, allowed: FrozenSet[str], alias: str = ""
) -> Tuple[str, List[Any]]:
    """
    R: Build "WHERE ..." and its params ("" and [] when unfiltered).

    Raises:
        InvalidFilterField: If a predicate names a non-whitelisted field
    """
    query.validate(allowed)
    prefix = f"{alias}." if alias else ""

    conditions: List[str] = []
    params: List[Any] = []

    for predicate in query.predicates:
        if isinstance(predicate, TextSearch):
            pattern = f"%{escape_like(predicate.term)}%"
            ors = [f"{prefix}{name}::text ILIKE %s ESCAPE '\\'" for name in predicate.fields]
            conditions.append("(" + " OR ".join(ors) + ")")
            params.extend([pattern] * len(predicate.fields))
        elif isinstance(predicate, Equals):
            conditions.append(f"{prefix}{predicate.field} = %s")
            params.append(_plain(predicate.value))
        elif isinstance(predicate, OneOf):
            if not predicate.values:
                conditions.append("FALSE")
                continue
            conditions.append(f"{prefix}{predicate.field} = ANY(%s)")
            params.append([_plain(v) for v in predicate.values])
        elif isinstance(predicate, DateRange):
            if predicate.start is not None:
                conditions.append(f"{prefix}{predicate.field} >= %s")
                params.append(predicate.start)
            if predicate.end is not None:
                conditions.append(f"{prefix}{predicate.field} < %s")
                params.append(predicate.end)
        else:
            raise TypeError(f"Unsupported predicate: {predicate!r}")

    if not conditions:
        return "", []
    return "WHERE " + " AND ".join(conditions), params
