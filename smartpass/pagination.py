"""
Name: Pagination Utilities

Responsibilities:
  - Validate page/limit query parameters for list endpoints
  - Compute offsets and page counts
"""

from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class PageRequest:
    """Requested page window (1-based page)."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if not 1 <= self.limit <= MAX_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_LIMIT}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def total_pages(total: int, limit: int) -> int:
    """ceil(total / limit); zero items means zero pages."""
    if total <= 0:
        return 0
    return math.ceil(total / limit)
