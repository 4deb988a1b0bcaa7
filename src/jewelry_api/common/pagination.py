import math
from typing import Any

from tortoise.queryset import QuerySet


async def paginate(
    query: QuerySet, page: int, limit: int, ordering: str
) -> tuple[list[Any], int, int]:
    """Runs one page of an ordered scan.

    Args:
        query: The filtered queryset.
        page: 1-based page number.
        limit: Page size.
        ordering: Tortoise ordering expression, e.g. ``"-created_at"``.

    Returns:
        A tuple of (rows on the page, total matching rows, total pages).
    """
    total = await query.count()
    offset = (page - 1) * limit
    rows = await query.order_by(ordering, "-id").offset(offset).limit(limit)
    total_pages = math.ceil(total / limit) if limit else 0
    return rows, total, total_pages
