"""
Name: HTTP Middleware

Responsibilities:
  - Generate and propagate request_id (UUID)
  - Set request context for logging
  - Add X-Request-Id response header
  - Enforce body size limits (413 Payload Too Large)

Collaborators:
  - context.py: ContextVars for request-scoped data
  - logger.py: Structured logging
  - config.py: MAX_BODY_BYTES setting

Constraints:
  - Must be outermost app middleware (before CORS, auth, etc.)
  - Must clear context after response
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .context import (
    clear_context,
    http_method_var,
    http_path_var,
    request_id_var,
)
from .error_responses import app_exception_handler, payload_too_large
from .logger import logger


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    R: Middleware that establishes request context and logs completion.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        # R: Honour an inbound id from a proxy, otherwise mint one
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        request_id_var.set(request_id)
        http_method_var.set(request.method)
        http_path_var.set(request.url.path)

        # R: Also store in request.state for handlers that need it
        request.state.request_id = request_id

        start_time = time.perf_counter()

        try:
            response = await call_next(request)

            latency_seconds = time.perf_counter() - start_time
            response.headers["X-Request-Id"] = request_id

            logger.info(
                "request completed",
                extra={
                    "status_code": response.status_code,
                    "latency_ms": round(latency_seconds * 1000, 2),
                },
            )
            return response

        except Exception as exc:
            latency_seconds = time.perf_counter() - start_time
            logger.exception(
                "request failed",
                extra={
                    "latency_ms": round(latency_seconds * 1000, 2),
                    "error": str(exc),
                },
            )
            raise

        finally:
            # R: Clear context to prevent leaks
            clear_context()


class BodyLimitMiddleware(BaseHTTPMiddleware):
    """
    R: Middleware that enforces request body size limits.

    Returns 413 Payload Too Large if Content-Length exceeds MAX_BODY_BYTES.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        from .config import get_settings

        max_bytes = get_settings().max_body_bytes
        content_length = request.headers.get("content-length")

        if content_length:
            try:
                too_large = int(content_length) > max_bytes
            except ValueError:
                too_large = False  # Invalid content-length, let it through
            if too_large:
                logger.warning(
                    "Request body too large",
                    extra={"content_length": content_length, "max_bytes": max_bytes},
                )
                return await app_exception_handler(
                    request, payload_too_large(max_bytes)
                )

        return await call_next(request)
