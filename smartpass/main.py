"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (create_app)
  - Configure middleware (security headers, body limit, request context, CORS)
  - Mount the /api routers and register RFC 7807 exception handlers
  - Expose /healthz

Collaborators:
  - config.get_settings: validated settings (fails fast on bad env)
  - infrastructure.db.pool: connection pool lifecycle
  - api.router.build_router: feature routers
  - exception_handlers.register_exception_handlers

Notes:
  - Middleware added last runs first: CORS -> RequestContext -> SecurityHeaders -> BodyLimit
  - APP_ENV=test skips the pool (in-memory repositories)
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api.router import build_router
from .config import get_settings
from .container import get_user_repository
from .exception_handlers import register_exception_handlers
from .infrastructure.db.pool import close_pool, init_pool
from .logger import apply_log_level, logger
from .middleware import BodyLimitMiddleware, RequestContextMiddleware
from .security import SecurityHeadersMiddleware

APP_TITLE = "SmartPass API"
APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Opens the pool outside of tests."""
    settings = get_settings()
    apply_log_level(settings.log_level)

    use_pool = not settings.is_test()
    if use_pool:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            timeout_seconds=settings.db_pool_timeout_seconds,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    try:
        logger.info(
            "SmartPass API starting up",
            extra={
                "app_env": settings.app_env,
                "jwt_expires_days": settings.jwt_expires_days,
                "open_registration": settings.allow_open_registration,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        if use_pool:
            close_pool()
        logger.info("SmartPass API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=APP_TITLE,
        version=APP_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Login and current user (JWT)"},
            {"name": "employees", "description": "Employee records and ID-card QR codes"},
            {"name": "users", "description": "Back-office accounts and settings"},
            {"name": "reports", "description": "Dashboard statistics"},
            {"name": "activity", "description": "Audit trail"},
        ],
    )

    app.add_middleware(BodyLimitMiddleware)
    app.add_middleware(
        SecurityHeadersMiddleware, is_production=settings.is_production()
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
        expose_headers=["X-Request-Id", "Content-Disposition"],
    )

    app.include_router(build_router())
    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    def healthz(request: Request):
        """
        R: Liveness plus store connectivity.

        Returns:
            ok: True if the store answered
            db: "connected" or "disconnected"
            request_id: Correlation ID for this request
        """
        db_status = "disconnected"
        if get_user_repository().ping():
            db_status = "connected"
        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve with uvicorn on HOST:PORT."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "smartpass.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
