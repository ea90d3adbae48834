"""Offset pagination over in-memory result lists.

page is 1-based; pages = ceil(total / limit).
"""

import math
from typing import Sequence, TypeVar

from src.ba_common.schemas import Pagination

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, limit: int) -> tuple[list[T], Pagination]:
    if page < 1 or limit < 1:
        raise ValueError(f"page and limit must be >= 1, got page={page} limit={limit}")
    start = (page - 1) * limit
    window = list(items[start:start + limit])
    total = len(items)
    return window, Pagination(
        page=page,
        limit=limit,
        total=total,
        pages=math.ceil(total / limit),
    )
