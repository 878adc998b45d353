"""
Name: Service Error -> HTTP Mapping

Responsibilities:
  - Translate ServiceError codes returned by use cases into RFC 7807 errors
  - Keep the application layer free of HTTP

Collaborators:
  - application.use_cases.results: ServiceError, ServiceErrorCode
  - error_responses: factories
"""

from __future__ import annotations

from typing import NoReturn

from ..application.use_cases import ServiceError, ServiceErrorCode
from ..error_responses import (
    conflict,
    forbidden,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)


def raise_service_error(error: ServiceError) -> NoReturn:
    if error.code == ServiceErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == ServiceErrorCode.UNAUTHORIZED:
        raise unauthorized(error.message)
    if error.code == ServiceErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == ServiceErrorCode.NOT_FOUND:
        raise not_found(error.resource or "Resource")
    if error.code == ServiceErrorCode.CONFLICT:
        raise conflict(error.message)

    # Unknown code: never leak the message
    raise internal_error()
