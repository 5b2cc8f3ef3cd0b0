"""Pagination and sorting for list endpoints."""


import math

from fastapi import Query
from pydantic import BaseModel

# Vendor columns a list may be sorted by
SORTABLE_FIELDS = ("name", "price", "status", "last_contact", "created_at", "updated_at")


class PaginationParams:
    """FastAPI dependency for `?page=1&limit=50&sort=name&order=asc`."""

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="Page number (1-based)"),
        limit: int = Query(default=50, ge=1, le=200, description="Items per page"),
        sort: str = Query(
            default="name",
            pattern=f"^({'|'.join(SORTABLE_FIELDS)})$",
            description="Sort field",
        ),
        order: str = Query(default="asc", pattern="^(asc|desc)$", description="Sort order"),
    ):
        self.page = page
        self.limit = limit
        self.sort = sort
        self.order = order

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> "PageMeta":
        return PageMeta.build(total, self.page, self.limit)


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        pages = math.ceil(total / limit) if limit else 1
        return cls(total=total, page=page, limit=limit, pages=pages)
