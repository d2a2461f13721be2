"""Application common module: pagination shared by list use cases."""

from .pagination import PaginatedResult, Pagination

__all__ = ["PaginatedResult", "Pagination"]
