"""
Page slicing for component listings.

Pages are 1-based. Asking for a page past the end returns an empty item list
with the real totals, so clients can tell "no more results" from an error.
"""

import math
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20


@dataclass
class Page(Generic[T]):
    items: list[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next,
        }


def paginate(items: list[T], page: Optional[int] = None, page_size: Optional[int] = None) -> Page[T]:
    page = page or 1
    page_size = page_size or DEFAULT_PAGE_SIZE
    total = len(items)
    offset = (page - 1) * page_size
    return Page(
        items=items[offset:offset + page_size],
        page=page,
        page_size=page_size,
        total_items=total,
        total_pages=math.ceil(total / page_size) if total else 0,
    )


def pagination_message(page: Page, verb: str, suffix: str = "") -> str:
    if not page.total_items:
        msg = f"{verb} 0 components"
    elif not page.items:
        msg = f"{verb} {page.total_items} components (page {page.page} is past the last page)"
    else:
        first = (page.page - 1) * page.page_size + 1
        last = first + len(page.items) - 1
        msg = (
            f"{verb} {page.total_items} components "
            f"(showing {first}-{last}, page {page.page} of {page.total_pages})"
        )
    return f"{msg}, {suffix}" if suffix else msg
