"""Page/sort request parameters shared by list endpoints."""

import math
import re
from dataclasses import dataclass

from sqlalchemy.orm import Query

from tenant_api.core.exceptions import ValidationException

MAX_PAGE_SIZE = 100
SORT_DIRECTIONS = ("asc", "desc")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake(name: str) -> str:
    """Convert a camelCase field name (as sent by clients) to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


@dataclass
class PageRequest:
    """
    Zero-based page request.

    Attributes:
        page: Page index, starting at 0
        size: Items per page (1..MAX_PAGE_SIZE)
        sort_by: Column name, snake_case or camelCase
        sort_dir: 'asc' or 'desc'
    """

    page: int = 0
    size: int = 10
    sort_by: str = "created_at"
    sort_dir: str = "desc"

    def __post_init__(self):
        if self.page < 0:
            raise ValidationException("Page index must not be negative")
        if not 1 <= self.size <= MAX_PAGE_SIZE:
            raise ValidationException(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
        self.sort_dir = self.sort_dir.lower()
        if self.sort_dir not in SORT_DIRECTIONS:
            raise ValidationException("Sort direction must be 'asc' or 'desc'")
        self.sort_by = to_snake(self.sort_by)

    @classmethod
    def from_sort_param(cls, page: int, size: int, sort: str | None, default_field: str) -> "PageRequest":
        """Build from a 'field,dir' sort parameter."""
        if not sort:
            return cls(page=page, size=size, sort_by=default_field, sort_dir="desc")
        field, _, direction = sort.partition(",")
        return cls(page=page, size=size, sort_by=field.strip() or default_field, sort_dir=direction.strip() or "asc")

    @property
    def offset(self) -> int:
        return self.page * self.size

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.size) if total else 0


def apply_page(query: Query, model, page_request: PageRequest, sortable: set[str]) -> tuple[list, int]:
    """
    Count, sort and slice a query.

    Args:
        query: Filtered query over model
        model: Mapped class owning the sort column
        page_request: Requested page
        sortable: Column names clients may sort on

    Returns:
        Tuple of (items on the page, total count)

    Raises:
        ValidationException: If the sort column is not allowed
    """
    if page_request.sort_by not in sortable:
        raise ValidationException(f"Cannot sort by '{page_request.sort_by}'", error_code="INVALID_SORT")

    total = query.count()

    column = getattr(model, page_request.sort_by)
    ordering = column.desc() if page_request.sort_dir == "desc" else column.asc()
    items = (
        query.order_by(ordering, model.id.desc())
        .limit(page_request.size)
        .offset(page_request.offset)
        .all()
    )
    return items, total
