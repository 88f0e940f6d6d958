from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import auth_required, current_identity, json_body, optional_int
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE
from ..daily_log.model import row_to_dict
from ..reports.csv_export import render_report_csv, report_filename


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.auth_service)

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def checkin():
        record = container.attendance_service.check_in(current_identity(), location=json_body().get("location"))
        return jsonify({"message": "Checked in successfully", "attendance": record.to_dict()})

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    def checkout():
        record = container.attendance_service.check_out(current_identity(), location=json_body().get("location"))
        return jsonify({"message": "Checked out successfully", "attendance": record.to_dict()})

    @app.route("/api/attendance/status", methods=["GET"], endpoint="attendance_status")
    @login_required
    def status():
        s = container.attendance_service.today_status(current_identity())
        return jsonify(
            {
                "hasCheckedIn": s.has_checked_in,
                "hasCheckedOut": s.has_checked_out,
                "attendance": s.attendance.to_dict() if s.attendance else None,
                "currentDate": s.current_date.strftime("%Y-%m-%d"),
            }
        )

    @app.route("/api/attendance/logs", methods=["GET"], endpoint="attendance_logs")
    @login_required
    def logs():
        log = container.daily_log_service.build_daily_log(
            current_identity(),
            day=request.args.get("date") or None,
            page=request.args.get("page", 1),
            page_size=request.args.get("limit", app.config.get("DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
            user_id=optional_int(request.args.get("userId")),
        )
        return jsonify(
            {
                "logs": [row_to_dict(r) for r in log.rows],
                "totalPages": log.total_pages,
                "currentPage": log.current_page,
                "total": log.total,
                "currentDate": log.day.strftime("%Y-%m-%d"),
            }
        )

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @login_required
    def stats():
        s = container.statistics_service.monthly_stats(
            current_identity(),
            year=request.args.get("year") or None,
            month=request.args.get("month") or None,
        )
        return jsonify(
            {
                "year": s.year,
                "month": s.month,
                "totalDays": s.total_days,
                "presentDays": s.present_days,
                "totalHours": s.total_hours,
                "averageHours": s.average_hours,
                "lateCount": s.late_count,
            }
        )

    def _build_report():
        return container.report_service.build_report(
            current_identity(),
            start=request.args.get("startDate"),
            end=request.args.get("endDate"),
            user_id=optional_int(request.args.get("userId")),
        )

    @app.route("/api/attendance/report", methods=["GET"], endpoint="attendance_report")
    @login_required
    def report():
        data = _build_report()
        return jsonify(
            {
                "report": [r.to_dict() for r in data.rows],
                "summary": data.summary.to_dict(),
                "dateRange": {
                    "startDate": data.start.strftime("%Y-%m-%d"),
                    "endDate": data.end.strftime("%Y-%m-%d"),
                },
                "totalRecords": data.summary.total_records,
            }
        )

    @app.route("/api/attendance/download-report", methods=["GET"], endpoint="attendance_download_report")
    @login_required
    def download_report():
        data = _build_report()
        content = render_report_csv(data, generated_by=current_identity(), generated_at=container.clock.now())
        return app.response_class(
            content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{report_filename(data)}"'},
        )
