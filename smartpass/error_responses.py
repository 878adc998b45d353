"""
Standardized error response catalog for API consistency.
All HTTP error responses follow the RFC 7807 Problem Details format.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
from uuid import uuid4

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .logger import logger


class ErrorCode(str, Enum):
    """Application error codes for client-side handling."""

    # 4xx Client Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # 5xx Server Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class ErrorDetail(BaseModel):
    """RFC 7807 Problem Details response.

    ``message`` mirrors ``detail`` for clients that read the legacy
    ``{"message": ...}`` error body.
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    message: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"
ERROR_TYPE_BASE = "https://api.smartpass.local/errors"

# R: Reusable OpenAPI response entry for RFC 7807 errors
_OPENAPI_ERROR_CONTENT = {
    PROBLEM_JSON_MEDIA_TYPE: {
        "schema": {"$ref": "#/components/schemas/ErrorDetail"},
    }
}


def _problem(description: str) -> dict[str, Any]:
    return {
        "description": f"{description} (RFC 7807 Problem Details)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    }


OPENAPI_ERROR_RESPONSES = {
    "400": _problem("Bad Request"),
    "401": _problem("Unauthorized"),
    "403": _problem("Forbidden"),
    "404": _problem("Not Found"),
    "409": _problem("Conflict"),
    "default": _problem("Error response"),
}


class AppHTTPException(HTTPException):
    """Application-specific HTTP exception with error code."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


# Pre-defined error factories
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(resource: str, identifier: str | None = None) -> AppHTTPException:
    if identifier is None:
        return AppHTTPException(404, ErrorCode.NOT_FOUND, f"{resource} not found")
    return AppHTTPException(
        404, ErrorCode.NOT_FOUND, f"{resource} '{identifier}' not found"
    )


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail)


def unauthorized(detail: str = "Authentication required") -> AppHTTPException:
    exc = AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)
    exc.headers = {"WWW-Authenticate": "Bearer"}
    return exc


def forbidden(detail: str = "Forbidden") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def payload_too_large(max_bytes: int) -> AppHTTPException:
    return AppHTTPException(
        413,
        ErrorCode.PAYLOAD_TOO_LARGE,
        f"Request body too large. Maximum size: {max_bytes} bytes",
    )


def internal_error(
    detail: str = "An unexpected error occurred", error_id: str | None = None
) -> AppHTTPException:
    errors = [{"error_id": error_id}] if error_id else None
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail, errors)


def service_unavailable(
    service: str, error_id: str | None = None
) -> AppHTTPException:
    errors = [{"error_id": error_id}] if error_id else None
    return AppHTTPException(
        503,
        ErrorCode.SERVICE_UNAVAILABLE,
        f"{service} is temporarily unavailable",
        errors,
    )


def _to_problem(request: Request, exc: AppHTTPException) -> ErrorDetail:
    return ErrorDetail(
        type=f"{ERROR_TYPE_BASE}/{exc.code.value.lower()}",
        title=exc.code.value.replace("_", " ").title(),
        status=exc.status_code,
        detail=exc.detail,
        message=exc.detail,
        code=exc.code,
        instance=str(request.url.path),
        errors=exc.errors,
    )


# Exception handlers for FastAPI
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Handler for AppHTTPException."""
    error = _to_problem(request, exc)
    headers = getattr(exc, "headers", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=error.model_dump(mode="json", exclude_none=True),
        headers=headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unhandled exceptions."""
    error_id = str(uuid4())
    logger.error(
        "Unhandled error",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"error_id": error_id},
    )
    return await app_exception_handler(request, internal_error(error_id=error_id))
