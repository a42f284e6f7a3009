"""Keyset pagination shared by the unit, ingredient and recipe listings.

Rows are paged by id: a page holds rows with id >= start_from in ascending id
order. One extra row is fetched to learn whether another page exists; its id
becomes the (inclusive) start_from of the next page.
"""

from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from app.exceptions import BadRequestError

T = TypeVar("T")

MIN_PAGE_LIMIT = 1
MAX_PAGE_LIMIT = 15


@dataclass
class Page(Generic[T]):
    items: List[T]
    next_start_from: Optional[int] = None


def check_page_limit(limit: int) -> None:
    """Raise BadRequestError unless MIN_PAGE_LIMIT <= limit <= MAX_PAGE_LIMIT."""
    if limit < MIN_PAGE_LIMIT or limit > MAX_PAGE_LIMIT:
        raise BadRequestError(
            f"The request limit must be between {MIN_PAGE_LIMIT} and {MAX_PAGE_LIMIT}",
            details={"limit": limit},
        )


def paginate(
    fetch: Callable[[int, int], Sequence[T]],
    limit: int,
    start_from: int = 0,
    key: Callable[[T], int] = lambda row: row.id,
) -> Page[T]:
    """
    Fetch one page.

    Args:
        fetch: ``fetch(start_from, max_rows)`` returning rows with id >= start_from,
            ordered by id ascending, at most max_rows of them
        limit: page size, 1..15
        start_from: smallest id to include, 0 for the beginning
        key: extracts the id of a row

    Returns:
        Page with at most ``limit`` items; next_start_from is set only when
        more than ``limit`` rows matched
    """
    check_page_limit(limit)

    rows = list(fetch(start_from, limit + 1))
    if len(rows) <= limit:
        return Page(items=rows, next_start_from=None)

    overflow = rows.pop()
    return Page(items=rows, next_start_from=key(overflow))
