"""
Name: Root Router

Responsibilities:
  - Compose the feature routers
  - Attach RFC 7807 responses to the OpenAPI schema

Notes:
  - build_router() avoids import-time side effects in tests
"""

from __future__ import annotations

from fastapi import APIRouter

from ..error_responses import OPENAPI_ERROR_RESPONSES
from .routers.activity import router as activity_router
from .routers.auth import router as auth_router
from .routers.employees import router as employees_router
from .routers.reports import router as reports_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(auth_router)
    api_router.include_router(employees_router)
    api_router.include_router(users_router)
    api_router.include_router(reports_router)
    api_router.include_router(activity_router)

    return api_router


__all__ = ["build_router"]
