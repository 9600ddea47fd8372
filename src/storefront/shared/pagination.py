"""Paging, sorting and scanning helpers shared by the list endpoints.

Listings are served straight from the store (``order_by`` plus
``offset``/``limit``) whenever the filter can be expressed as equality.
Free-text search and sorts on derived fields need the full filtered set,
which ``scan`` reads in bounded batches.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from protean.exceptions import ValidationError

SORT_ORDERS = ("asc", "desc")
MAX_LIMIT = 100
SCAN_BATCH_SIZE = 200


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 10
    sort_by: str = "created_at"
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"

    @property
    def order_expression(self) -> str:
        return f"-{self.sort_by}" if self.descending else self.sort_by

    def validate(self, sortable: Iterable[str]) -> PageRequest:
        errors: dict[str, list[str]] = {}
        if self.page < 1:
            errors["page"] = ["Page must be 1 or greater"]
        if not 1 <= self.limit <= MAX_LIMIT:
            errors["limit"] = [f"Limit must be between 1 and {MAX_LIMIT}"]
        if self.sort_order not in SORT_ORDERS:
            errors["sort_order"] = ["Sort order must be 'asc' or 'desc'"]
        allowed = sorted(sortable)
        if self.sort_by not in allowed:
            errors["sort_by"] = [f"Sort field must be one of {', '.join(allowed)}"]
        if errors:
            raise ValidationError(errors)
        return self


@dataclass(frozen=True)
class Page:
    items: list[Any] = field(default_factory=list)
    count: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.count / self.limit) if self.limit else 0


def fetch_page(queryset, request: PageRequest, tiebreak: str = "id") -> Page:
    """Let the store sort and slice.

    Rows with equal sort values are ordered by ``tiebreak`` so pages never
    overlap or skip records.
    """
    ordering = [request.order_expression]
    if request.sort_by != tiebreak:
        ordering.append(tiebreak)
    result = queryset.order_by(ordering).offset(request.offset).limit(request.limit).all()
    return Page(items=list(result.items), count=result.total, page=request.page, limit=request.limit)


def scan(queryset, batch_size: int = SCAN_BATCH_SIZE) -> list[Any]:
    """Read every record matching ``queryset`` in fixed-size batches."""
    records: list[Any] = []
    offset = 0
    while True:
        result = queryset.offset(offset).limit(batch_size).all()
        records.extend(result.items)
        offset += batch_size
        if not result.items or offset >= result.total:
            return records


def paginate(
    records: list[Any],
    request: PageRequest,
    sort_key: Callable[[Any], Any],
) -> Page:
    """Sort and slice an in-memory result set."""
    ordered = sorted(records, key=sort_key, reverse=request.descending)
    window = ordered[request.offset : request.offset + request.limit]
    return Page(items=window, count=len(ordered), page=request.page, limit=request.limit)


def contains(needle: str, *haystacks: str | None) -> bool:
    """Case-insensitive substring match across several fields."""
    needle = needle.casefold()
    return any(needle in haystack.casefold() for haystack in haystacks if haystack)
