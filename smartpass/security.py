"""
Name: Security Headers Middleware

Responsibilities:
  - Stamp OWASP response headers on every response
  - Mark API responses (tokens, personal data) as non-cacheable

Collaborators:
  - main.py: registers the middleware with the production flag

Notes:
  - HSTS is only sent in production (TLS terminates in front of the app)
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

API_PREFIX = "/api/"

STATIC_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), geolocation=(), microphone=(), payment=(), usb=()",
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"


def content_security_policy(is_production: bool) -> str:
    """R: CSP value; /docs needs inline script and style outside production."""
    inline = "" if is_production else " 'unsafe-inline'"
    directives = (
        "default-src 'self'",
        f"script-src 'self'{inline}",
        f"style-src 'self'{inline}",
        "img-src 'self' data:",
        "connect-src 'self'",
    )
    return "; ".join(directives)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, is_production: bool | None = None):
        super().__init__(app)
        if is_production is None:
            from .config import get_settings

            is_production = get_settings().is_production()
        self._headers = dict(STATIC_HEADERS)
        self._headers["Content-Security-Policy"] = content_security_policy(
            is_production
        )
        if is_production:
            self._headers["Strict-Transport-Security"] = HSTS_VALUE

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers.update(self._headers)
        if request.url.path.startswith(API_PREFIX):
            response.headers.setdefault("Cache-Control", "no-store")
        return response
