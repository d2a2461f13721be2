"""
Page-number pagination for assignment listings.

Repositories receive a ``Pagination`` and return ``(items, total)``. Use cases
wrap that pair in a ``PaginatedResult``, which the routers turn into a
``PaginatedResponse``.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    """1-indexed page request, capped at MAX_PAGE_SIZE items per page."""

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        """Rows to skip before this page starts."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    items: list[T]
    total: int
    pagination: Pagination

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def page_size(self) -> int:
        return self.pagination.page_size

    @property
    def total_pages(self) -> int:
        """Ceiling of total / page_size; an empty listing has zero pages."""
        pages, remainder = divmod(self.total, self.page_size)
        return pages + (1 if remainder else 0)
