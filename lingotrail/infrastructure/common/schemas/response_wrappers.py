"""Common response wrapper schemas for API responses."""

from collections.abc import Callable
from typing import Any, Generic, Self, TypeVar

from pydantic import BaseModel, Field

from lingotrail.application.common.pagination import PaginatedResult

T = TypeVar("T")


class SuccessResponse(BaseModel):
    """Acknowledgement for commands that return no resource."""

    success: bool
    message: str


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of items with page-number metadata."""

    items: list[T]
    total: int = Field(..., ge=0, description="Items across all pages")
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)

    @classmethod
    def from_result(cls, result: PaginatedResult[Any], build: Callable[[Any], T]) -> Self:
        """Convert a use case page, building each item's schema with ``build``."""
        return cls(
            items=[build(item) for item in result.items],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
        )
