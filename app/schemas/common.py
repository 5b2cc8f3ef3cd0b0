"""Shared Pydantic schema base (camelCase on the wire) and envelope pieces."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """All API schemas inherit from this; fields are snake_case in Python, camelCase in JSON."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[list[dict[str, Any]]] = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: ErrorDetail


class HealthResponse(CamelModel):
    """Health-check response returned by /health, including which integrations are live."""

    status: str = "ok"
    app: str
    env: str
    ai_enabled: bool = False
    email_enabled: bool = False
