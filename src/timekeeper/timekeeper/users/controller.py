from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import auth_required, current_identity, json_body, optional_int
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_RECENT_LIMIT


def _identity_dict(identity) -> dict:
    return {
        "id": identity.user_id,
        "name": identity.name,
        "employeeId": identity.employee_id,
        "role": identity.role.value,
        "department": identity.department,
    }


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.auth_service)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        result = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))
        return jsonify({"token": result.token, "user": _identity_dict(result.identity)})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(_identity_dict(current_identity()))

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @login_required
    def list_users():
        page = container.roster_service.list_roster(
            caller=current_identity(),
            page=request.args.get("page", 1),
            page_size=request.args.get("limit", DEFAULT_PAGE_SIZE),
            search=request.args.get("search"),
            department=request.args.get("department"),
        )
        return jsonify(
            {
                "users": [u.display() | {"email": u.email, "role": u.role.value} for u in page.items],
                "totalPages": page.total_pages,
                "currentPage": page.current_page,
                "total": page.total,
            }
        )

    @app.route("/api/users/departments", methods=["GET"], endpoint="list_departments")
    @login_required
    def list_departments():
        return jsonify(container.roster_service.list_departments())

    @app.route("/api/users/dashboard-stats", methods=["GET"], endpoint="dashboard_stats")
    @login_required
    def dashboard_stats():
        s = container.statistics_service.org_snapshot(current_identity(), day=request.args.get("date") or None)
        return jsonify(
            {
                "date": s.day.strftime("%Y-%m-%d"),
                "totalEmployees": s.total_employees,
                "presentToday": s.present_today,
                "absentToday": s.absent_today,
                "attendanceRate": s.attendance_rate,
                "departmentStats": [{"department": d.department, "count": d.count} for d in s.department_breakdown],
            }
        )

    @app.route("/api/users/recent-attendance", methods=["GET"], endpoint="recent_attendance")
    @login_required
    def recent_attendance():
        limit = optional_int(request.args.get("limit")) or DEFAULT_RECENT_LIMIT
        return jsonify(container.attendance_service.recent_attendance(current_identity(), limit=limit))

    @app.route("/api/users/mark-attendance", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        body = json_body()
        record = container.attendance_service.mark_attendance(
            current_identity(),
            user_id=optional_int(body.get("userId")) or 0,
            action=body.get("action", ""),
            location=body.get("location"),
        )
        return jsonify({"message": f"Attendance {body.get('action')} recorded", "attendance": record.to_dict()})
