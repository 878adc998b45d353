from datetime import datetime, timedelta, timezone

import pytest

from smartpass.domain.entities import EmployeeStatus

pytestmark = pytest.mark.unit


def test_reports_require_token(client):
    for path in ("/api/reports/stats", "/api/reports/growth", "/api/reports/activity"):
        assert client.get(path).status_code == 401


def test_stats(client, viewer, auth_headers, make_employee):
    make_employee("Ana")
    make_employee("Bia", status=EmployeeStatus.INACTIVE)

    body = client.get("/api/reports/stats", headers=auth_headers(viewer)).json()

    assert body["totalEmployees"] == 2
    assert body["activeEmployees"] == 1
    assert body["inactiveEmployees"] == 1
    assert body["totalUsers"] == 1
    assert "timestamp" in body


def test_growth_defaults_to_daily_buckets(client, viewer, auth_headers, make_employee):
    make_employee("Ana")

    body = client.get(
        "/api/reports/growth", params={"range": "unknown"}, headers=auth_headers(viewer)
    ).json()

    assert len(body) == 1
    assert len(body[0]["date"]) == len("2025-03-15")
    assert body[0]["employees"] == 1


def test_quarter_growth_uses_months(client, viewer, auth_headers, make_employee):
    make_employee("Ana")

    body = client.get(
        "/api/reports/growth", params={"range": "quarter"}, headers=auth_headers(viewer)
    ).json()

    assert len(body[0]["date"]) == len("2025-03")


def test_recent_activity_feed(client, viewer, auth_headers, make_employee):
    now = datetime.now(timezone.utc)
    for i in range(3):
        make_employee(f"E{i}", created_at=now - timedelta(minutes=i))

    body = client.get(
        "/api/reports/activity", params={"limit": 2}, headers=auth_headers(viewer)
    ).json()

    assert [item["name"] for item in body] == ["E0", "E1"]
    assert body[0]["user"] == "System/Admin"
    assert body[0]["action"] == "New Employee Added: E0"


def test_custom_report(client, viewer, auth_headers, make_employee):
    make_employee("Ana", created_at=datetime(2025, 3, 10, 23, 59, tzinfo=timezone.utc))
    make_employee(
        "Bia",
        created_at=datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc),
        status=EmployeeStatus.INACTIVE,
    )
    make_employee("Caio", created_at=datetime(2025, 3, 11, 0, 0, tzinfo=timezone.utc))

    response = client.post(
        "/api/reports/custom",
        json={"status": "Active", "dateFrom": "2025-03-10", "dateTo": "2025-03-10"},
        headers=auth_headers(viewer),
    )

    body = response.json()
    assert response.status_code == 200
    assert body["summary"] == {"total": 1, "active": 1, "inactive": 0}
    assert [row["name"] for row in body["results"]] == ["Ana"]
    assert "qrCode" not in body["results"][0]
    assert body["filters"] == {
        "status": "Active",
        "dateFrom": "2025-03-10",
        "dateTo": "2025-03-10",
    }
