from __future__ import annotations

import codecs
from datetime import date

import pytest


def test_missing_token_is_401(client):
    resp = client.get("/api/attendance/status")

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "No token provided", "code": "AuthenticationError"}


def test_login_then_me(client):
    resp = client.post("/api/auth/login", json={"email": "user4@example.com", "password": "secret123"})
    assert resp.status_code == 200
    token = resp.get_json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.get_json()["role"] == "manager"


def test_bad_login_is_401(client):
    resp = client.post("/api/auth/login", json={"email": "user4@example.com", "password": "nope"})
    assert resp.status_code == 401


def test_check_in_twice(client, auth_headers):
    first = client.post("/api/attendance/checkin", json={"location": "HQ"}, headers=auth_headers(1))
    assert first.status_code == 200
    assert first.get_json()["attendance"]["checkIn"] == "09:00:00"

    second = client.post("/api/attendance/checkin", headers=auth_headers(1))
    assert second.status_code == 400
    assert second.get_json()["code"] == "AlreadyCheckedIn"

    status = client.get("/api/attendance/status", headers=auth_headers(1)).get_json()
    assert status["hasCheckedIn"] is True and status["hasCheckedOut"] is False
    assert status["currentDate"] == "2026-02-10"


def test_checkout_without_check_in_is_404(client, auth_headers):
    resp = client.post("/api/attendance/checkout", headers=auth_headers(2))
    assert resp.status_code == 404
    assert resp.get_json()["code"] == "NoCheckInFound"


def test_employee_cannot_read_reports(client, auth_headers):
    resp = client.get("/api/attendance/report?startDate=2026-02-01&endDate=2026-02-10", headers=auth_headers(1))
    assert resp.status_code == 403


def test_report_and_download(client, auth_headers, attendance_repo):
    attendance_repo.seed(1, date(2026, 2, 9), "09:00:00", "17:00:00")
    query = "startDate=2026-02-01&endDate=2026-02-10"

    data = client.get(f"/api/attendance/report?{query}", headers=auth_headers(4)).get_json()
    assert data["totalRecords"] == 1
    assert data["summary"]["productivityRate"] == 100.0
    assert data["dateRange"] == {"startDate": "2026-02-01", "endDate": "2026-02-10"}

    resp = client.get(f"/api/attendance/download-report?{query}", headers=auth_headers(4))
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert 'filename="Attendance_Report_2026-02-01_to_2026-02-10.csv"' in resp.headers["Content-Disposition"]
    assert resp.data.startswith(codecs.BOM_UTF8)
    assert resp.data.decode("utf-8-sig").startswith("EMPLOYEE ATTENDANCE REPORT")


def test_empty_report_is_404(client, auth_headers):
    resp = client.get("/api/attendance/report?startDate=2026-03-01&endDate=2026-03-02", headers=auth_headers(4))
    assert resp.status_code == 404


def test_report_needs_dates(client, auth_headers):
    resp = client.get("/api/attendance/report", headers=auth_headers(4))
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "InvalidRangeError"


def test_logs_reconcile_the_day(client, auth_headers, attendance_repo, leaves_repo):
    attendance_repo.seed(1, date(2026, 2, 10), "08:55:00")
    leaves_repo.seed_approved(2, date(2026, 2, 10), date(2026, 2, 10))

    data = client.get("/api/attendance/logs?limit=3", headers=auth_headers(5)).get_json()

    assert data["total"] == 6
    assert data["totalPages"] == 2
    assert [row["kind"] for row in data["logs"]] == ["absent", "attendance", "on_leave"]


def test_logs_reject_bad_user_filter(client, auth_headers):
    resp = client.get("/api/attendance/logs?userId=abc", headers=auth_headers(5))
    assert resp.status_code == 400


def test_monthly_stats_endpoint(client, auth_headers, attendance_repo):
    attendance_repo.seed(1, date(2026, 2, 2), "09:00:00", "17:00:00")

    data = client.get("/api/attendance/stats", headers=auth_headers(1)).get_json()

    assert data == {
        "year": 2026,
        "month": 2,
        "totalDays": 1,
        "presentDays": 1,
        "totalHours": 8.0,
        "averageHours": 8.0,
        "lateCount": 0,
    }


def test_dashboard_and_mark_attendance(client, auth_headers):
    marked = client.post("/api/users/mark-attendance", json={"userId": 3, "action": "checkin"}, headers=auth_headers(6))
    assert marked.status_code == 200

    dash = client.get("/api/users/dashboard-stats", headers=auth_headers(6)).get_json()
    assert dash["presentToday"] == 1
    assert dash["absentToday"] == 5
    assert dash["attendanceRate"] == 17

    denied = client.post("/api/users/mark-attendance", json={"userId": 3, "action": "checkin"}, headers=auth_headers(4))
    assert denied.status_code == 403


def test_leave_flow(client, auth_headers):
    submitted = client.post(
        "/api/leave/request",
        json={"leaveType": "annual", "startDate": "2026-02-16", "endDate": "2026-02-18", "reason": "Trip"},
        headers=auth_headers(1),
    )
    assert submitted.status_code == 200
    leave_id = submitted.get_json()["leave"]["id"]

    for supervisor in (4, 5):
        denied = client.put(f"/api/leave/requests/{leave_id}", json={"status": "approved"}, headers=auth_headers(supervisor))
        assert denied.status_code == 403

    decided = client.put(f"/api/leave/requests/{leave_id}", json={"status": "approved"}, headers=auth_headers(6))
    assert decided.get_json()["leave"]["status"] == "approved"

    again = client.put(f"/api/leave/requests/{leave_id}", json={"status": "rejected"}, headers=auth_headers(6))
    assert again.status_code == 400
    assert again.get_json()["code"] == "InvalidStateError"

    missing = client.put("/api/leave/requests/999", json={"status": "approved"}, headers=auth_headers(6))
    assert missing.status_code == 404

    stats = client.get("/api/leave/stats", headers=auth_headers(1)).get_json()
    assert stats == {"pending": 0, "approved": 1, "rejected": 0, "totalDays": 3}


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_stats_reject_out_of_range_year(client, auth_headers):
    resp = client.get("/api/attendance/stats?year=10000&month=1", headers=auth_headers(1))

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "InvalidRangeError"


def test_non_object_json_body_is_rejected(client, auth_headers):
    resp = client.post("/api/leave/request", json=[1, 2], headers=auth_headers(1))

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "ValidationError"


@pytest.mark.parametrize(
    "body",
    [
        {"email": 5, "password": "secret123"},
        {"email": "user1@example.com", "password": 123},
        {"email": ["user1@example.com"], "password": "secret123"},
    ],
)
def test_login_rejects_non_text_credentials(client, body):
    resp = client.post("/api/auth/login", json=body)

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "ValidationError"
