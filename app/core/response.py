"""Response envelopes shared by every v1 endpoint.

Single items and plain lists come back as ``{"data": ..., "message": ...}``;
paginated lists as ``{"data": [...], "meta": {...}}``. ``message`` is the
confirmation text the dashboard shows after a write ("Vendor added
successfully!"), and is null on reads.
"""


from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.core.pagination import PageMeta, PaginationParams

T = TypeVar("T")

_ENVELOPE_CONFIG = {
    "populate_by_name": True,
    "alias_generator": to_camel,
}


class DataResponse(BaseModel, Generic[T]):
    data: T
    message: Optional[str] = None

    model_config = _ENVELOPE_CONFIG


class ListResponse(BaseModel, Generic[T]):
    data: list[T]
    meta: PageMeta

    model_config = _ENVELOPE_CONFIG


def paginated(items: list, total: int, pagination: PaginationParams) -> dict:
    """Build a paginated response dict for use with ListResponse."""
    return {"data": items, "meta": pagination.meta(total)}
