"""Pagination utilities for list endpoints.

Lists are unpaginated unless the caller asks for a page; then the response
switches to the ``PaginatedResponse`` envelope.
"""

from dataclasses import asdict, dataclass
from typing import Any, Generic, TypeVar

from fastapi import Query, Request


T = TypeVar("T")

# Pagination limits (overridable via settings)
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100


@dataclass
class PaginationParams:
    """Pagination parameters from query string."""
    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


def get_pagination(
    request: Request,
    page: int | None = Query(None, ge=1, description="Page number (1-indexed); omit for the full list"),
    per_page: int | None = Query(None, ge=1, description="Items per page"),
) -> PaginationParams | None:
    """
    Optional pagination dependency.

    Returns None when no page was requested so handlers can fall back
    to returning the whole table.
    """
    if page is None:
        return None
    settings = getattr(request.app.state, "settings", None)
    default_per_page = settings.DEFAULT_PER_PAGE if settings else DEFAULT_PER_PAGE
    max_per_page = settings.MAX_PER_PAGE if settings else MAX_PER_PAGE
    return PaginationParams(page=page, per_page=min(per_page or default_per_page, max_per_page))


@dataclass
class PaginatedResponse(Generic[T]):
    """Standard paginated response structure."""
    items: list[T]
    total: int
    page: int
    per_page: int
    pages: int

    @classmethod
    def create(cls, items: list[T], total: int, pagination: PaginationParams) -> "PaginatedResponse[T]":
        pages = (total + pagination.per_page - 1) // pagination.per_page if pagination.per_page > 0 else 0
        return cls(
            items=items,
            total=total,
            page=pagination.page,
            per_page=pagination.per_page,
            pages=pages,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
