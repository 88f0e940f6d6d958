from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from .validators import require_positive_int

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    total_pages: int
    current_page: int
    page_size: int


def paginate(items: Sequence[T], page, page_size) -> Page[T]:
    """Slice an ordered sequence; pages past the end are empty, never an error."""
    page = require_positive_int(page, "Page")
    page_size = require_positive_int(page_size, "Page size")

    total = len(items)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        total=total,
        total_pages=math.ceil(total / page_size),
        current_page=page,
        page_size=page_size,
    )
