# =============================================================================
# lib/pagination.py - Page Window Arithmetic
# =============================================================================
# Turns (page, rows_per_page, total) into an offset/limit window.
# Pages are 1-indexed. A page past the end is valid and simply empty.
# =============================================================================

import math
from dataclasses import dataclass
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_ROWS_PER_PAGE = 5


@dataclass(frozen=True)
class PageWindow:
    """Offset/limit window for one page of results."""
    page: int
    rows_per_page: int
    total: int
    total_pages: int
    offset: int
    limit: int

    @property
    def in_range(self) -> bool:
        """True if the page holds at least one row."""
        return self.page <= self.total_pages


def coerce_positive_int(value: Any, default: int) -> int:
    """
    Parse a query value as a positive integer.

    Numeric spellings of a whole number ("2.0", "1e1") are accepted.
    Missing, non-numeric, fractional and non-positive values fall back
    to `default`.

    Example:
        coerce_positive_int("3", 1)    # 3
        coerce_positive_int("1e1", 1)  # 10
        coerce_positive_int("abc", 1)  # 1
        coerce_positive_int(None, 5)   # 5
    """
    if value is None:
        return default
    try:
        number = float(str(value).strip())
    except ValueError:
        return default
    # nan and inf are not integers either
    if not number.is_integer() or number < 1:
        return default
    return int(number)


def paginate(page: int, rows_per_page: int, total: int) -> PageWindow:
    """
    Compute the window for `page`.

    Args:
        page: 1-indexed page number (>= 1)
        rows_per_page: Page size (>= 1)
        total: Total number of rows (>= 0)

    Raises:
        ValueError: If any argument is out of range
    """
    if page < 1 or rows_per_page < 1:
        raise ValueError(f"page and rows_per_page must be >= 1 (got {page}, {rows_per_page})")
    if total < 0:
        raise ValueError(f"total must be >= 0 (got {total})")

    return PageWindow(
        page=page,
        rows_per_page=rows_per_page,
        total=total,
        total_pages=math.ceil(total / rows_per_page),
        offset=(page - 1) * rows_per_page,
        limit=rows_per_page,
    )
