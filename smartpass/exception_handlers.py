"""
Name: FastAPI Exception Handlers

Responsibilities:
  - Convert internal exceptions to RFC 7807 responses
  - Turn request validation failures into 400 problem bodies
  - Centralized logging of errors with correlation IDs

Collaborators:
  - main.py: Registers these handlers
  - exceptions.py: SmartPassError, DatabaseError, StoreTimeoutError

Constraints:
  - Store driver messages never reach the client
  - HTTP status codes: 503 for store timeouts, 500 for other internal errors
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .error_responses import (
    AppHTTPException,
    app_exception_handler,
    generic_exception_handler,
    internal_error,
    service_unavailable,
    validation_error,
)
from .exceptions import DatabaseError, SmartPassError, StoreTimeoutError
from .logger import logger


async def store_timeout_handler(
    request: Request, exc: StoreTimeoutError
) -> JSONResponse:
    """Handle store timeouts (statement timeout or pool exhaustion)."""
    logger.error(
        "Store timeout", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    return await app_exception_handler(
        request, service_unavailable("Database", error_id=exc.error_id)
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Handle database errors with a generic response."""
    logger.error(
        "Database error", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    return await app_exception_handler(request, internal_error(error_id=exc.error_id))


async def smartpass_error_handler(
    request: Request, exc: SmartPassError
) -> JSONResponse:
    """Handle any other internal error."""
    logger.error(
        "Internal error", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    return await app_exception_handler(request, internal_error(error_id=exc.error_id))


def _format_validation_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "")})
    return errors


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed query params and bodies as 400."""
    errors = _format_validation_errors(exc)
    detail = "Invalid request"
    if errors:
        first = errors[0]
        detail = f"{first['field']}: {first['message']}" if first["field"] else first[
            "message"
        ]
    return await app_exception_handler(request, validation_error(detail, errors))


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers on the FastAPI app.

    Usage:
        from .exception_handlers import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(StoreTimeoutError, store_timeout_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(SmartPassError, smartpass_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
