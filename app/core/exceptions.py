"""Domain errors and the FastAPI handlers that render them.

Every error response has the same body::

    {"error": {"code": "NOT_FOUND", "message": "Vendor 'abc' not found"}}

Request validation failures add a ``details`` list with one entry per bad field.
"""


import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base for errors a service raises on purpose; carries HTTP status and error code."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(AppException):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: str | None = None):
        super().__init__(
            f"{entity} '{entity_id}' not found" if entity_id else f"{entity} not found"
        )


class ConflictError(AppException):
    """Duplicate category name and similar uniqueness clashes."""

    status_code = 409
    code = "CONFLICT"


class ValidationError(AppException):
    """Well-formed request that breaks a business rule (e.g. vendor from another category)."""

    status_code = 422
    code = "VALIDATION_ERROR"


class EmailDeliveryError(AppException):
    """The email provider rejected or failed a workflow send."""

    status_code = 502
    code = "EMAIL_DELIVERY_ERROR"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error(status_code: int, code: str, message: str, details: list | None = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        level = logging.ERROR if exc.status_code >= 500 else logging.INFO
        logger.log(level, "%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
        return _error(exc.status_code, exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
            for err in exc.errors()
        ]
        return _error(422, "VALIDATION_ERROR", "Request validation failed", details)

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        # Races past the service-level checks (e.g. two categories created with one name)
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return _error(409, "CONFLICT", "The change conflicts with existing data")

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return _error(404, "NOT_FOUND", "Resource not found")

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "INTERNAL_ERROR", "An unexpected error occurred")
