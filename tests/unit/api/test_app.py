"""
Name: Application Wiring Tests

Responsibilities:
  - /healthz contract
  - Route table exposes every feature group
  - CORS and request id headers on API responses
"""

from unittest.mock import patch

import pytest

from smartpass.main import create_app

pytestmark = pytest.mark.unit


def test_healthz_connected(client):
    response = client.get("/healthz", headers={"X-Request-Id": "req-1"})

    assert response.json() == {"ok": True, "db": "connected", "request_id": "req-1"}


def test_healthz_disconnected(client):
    with patch(
        "smartpass.infrastructure.repositories.InMemoryUserRepository.ping",
        return_value=False,
    ):
        body = client.get("/healthz").json()

    assert body["ok"] is False
    assert body["db"] == "disconnected"


def test_route_table():
    paths = {
        (method.upper(), path)
        for path, operations in create_app().openapi()["paths"].items()
        for method in operations
    }

    expected = {
        ("POST", "/api/auth/login"),
        ("GET", "/api/auth/me"),
        ("POST", "/api/auth/change-password"),
        ("GET", "/api/employees"),
        ("POST", "/api/employees"),
        ("GET", "/api/employees/public/{slug}"),
        ("GET", "/api/employees/{employee_id}"),
        ("PUT", "/api/employees/{employee_id}"),
        ("DELETE", "/api/employees/{employee_id}"),
        ("POST", "/api/employees/{employee_id}/qr"),
        ("DELETE", "/api/employees/{employee_id}/qr"),
        ("GET", "/api/users"),
        ("POST", "/api/users"),
        ("GET", "/api/users/me/settings"),
        ("PUT", "/api/users/me/settings"),
        ("GET", "/api/users/{user_id}"),
        ("PUT", "/api/users/{user_id}"),
        ("DELETE", "/api/users/{user_id}"),
        ("GET", "/api/reports/stats"),
        ("GET", "/api/reports/growth"),
        ("GET", "/api/reports/activity"),
        ("POST", "/api/reports/custom"),
        ("GET", "/api/activity"),
        ("GET", "/api/activity/export"),
        ("GET", "/healthz"),
    }
    assert expected <= paths


def test_cors_preflight(client):
    response = client.options(
        "/api/employees",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_error_responses_carry_request_id(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.headers["X-Request-Id"]
    assert response.headers["content-type"].startswith("application/problem+json")
