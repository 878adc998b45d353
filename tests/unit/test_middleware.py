"""
Name: Middleware Tests

Responsibilities:
  - X-Request-Id generation and propagation
  - Body size limit (413)
  - Security headers (CSP, HSTS only in production)
"""

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from smartpass.middleware import BodyLimitMiddleware, RequestContextMiddleware
from smartpass.security import SecurityHeadersMiddleware

pytestmark = pytest.mark.unit


def _build_app(*, is_production: bool = False) -> FastAPI:
    app = FastAPI()
    app.add_middleware(BodyLimitMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, is_production=is_production)
    app.add_middleware(RequestContextMiddleware)

    @app.get("/ping")
    def ping(request: Request):
        return {"request_id": request.state.request_id}

    @app.get("/api/ping")
    def api_ping():
        return {"ok": True}

    @app.post("/echo")
    async def echo(request: Request):
        return {"size": len(await request.body())}

    return app


def test_request_id_generated_and_returned():
    client = TestClient(_build_app())
    res = client.get("/ping")

    assert res.status_code == 200
    assert res.headers["X-Request-Id"]
    assert res.json()["request_id"] == res.headers["X-Request-Id"]


def test_inbound_request_id_is_honoured():
    client = TestClient(_build_app())
    res = client.get("/ping", headers={"X-Request-Id": "trace-123"})

    assert res.headers["X-Request-Id"] == "trace-123"


def test_body_over_limit_is_413(monkeypatch):
    monkeypatch.setenv("MAX_BODY_BYTES", "16")
    client = TestClient(_build_app())

    res = client.post("/echo", content=b"x" * 64)

    assert res.status_code == 413
    assert res.json()["code"] == "PAYLOAD_TOO_LARGE"


def test_body_under_limit_passes(monkeypatch):
    monkeypatch.setenv("MAX_BODY_BYTES", "16")
    client = TestClient(_build_app())

    res = client.post("/echo", content=b"x" * 8)

    assert res.status_code == 200
    assert res.json() == {"size": 8}


def test_security_headers_outside_production():
    res = TestClient(_build_app()).get("/ping")

    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "DENY"
    assert "unsafe-inline" in res.headers["Content-Security-Policy"]
    assert "Strict-Transport-Security" not in res.headers


def test_security_headers_in_production():
    res = TestClient(_build_app(is_production=True)).get("/ping")

    assert "unsafe-inline" not in res.headers["Content-Security-Policy"]
    assert res.headers["Strict-Transport-Security"].startswith("max-age=")


def test_api_responses_are_not_cached():
    client = TestClient(_build_app())

    assert "Cache-Control" not in client.get("/ping").headers
    assert client.get("/api/ping").headers["Cache-Control"] == "no-store"
