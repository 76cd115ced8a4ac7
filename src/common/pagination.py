"""
Pagination utilities for django-ninja endpoints.
"""

from typing import Any

from django.db.models import QuerySet
from ninja import Schema


class PaginatedResponse(Schema):
    count: int
    page: int
    limit: int
    has_more: bool
    results: list[Any]


def paginate_queryset(
    queryset: QuerySet,
    page: int = 1,
    page_size: int = 20,
    max_page_size: int = 100,
) -> tuple[QuerySet, int]:
    """
    Apply offset pagination to a queryset.

    Returns (sliced_queryset, total_count).
    """
    page_size = max(min(page_size, max_page_size), 1)
    page = max(page, 1)
    offset = (page - 1) * page_size

    total = queryset.count()
    sliced = queryset[offset : offset + page_size]

    return sliced, total


def page_meta(*, total: int, page: int, limit: int) -> dict:
    """Counters shared by every paginated response body."""
    page = max(page, 1)
    return {
        "count": total,
        "page": page,
        "limit": limit,
        "has_more": page * limit < total,
    }
