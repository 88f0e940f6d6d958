from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import auth_required, current_identity, json_body, optional_int
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE


def register(app: Flask, container: Container) -> None:
    login_required = auth_required(container.auth_service)

    @app.route("/api/leave/request", methods=["POST"], endpoint="leave_request")
    @login_required
    def submit():
        body = json_body()
        leave = container.leave_service.submit(
            current_identity(),
            leave_type=body.get("leaveType", ""),
            start_date=body.get("startDate"),
            end_date=body.get("endDate"),
            reason=body.get("reason", ""),
        )
        return jsonify({"message": "Leave request submitted successfully", "leave": leave.to_dict()})

    @app.route("/api/leave/requests", methods=["GET"], endpoint="leave_requests")
    @login_required
    def list_requests():
        page = container.leave_service.list_requests(
            current_identity(),
            page=request.args.get("page", 1),
            page_size=request.args.get("limit", DEFAULT_PAGE_SIZE),
            status=request.args.get("status") or None,
            user_id=optional_int(request.args.get("userId")),
        )
        return jsonify(
            {
                "leaves": [lv.to_dict() for lv in page.items],
                "totalPages": page.total_pages,
                "currentPage": page.current_page,
                "total": page.total,
            }
        )

    @app.route("/api/leave/requests/<int:leave_id>", methods=["PUT"], endpoint="leave_decide")
    @login_required
    def decide(leave_id: int):
        body = json_body()
        leave = container.leave_service.decide(
            current_identity(),
            leave_id=leave_id,
            decision=body.get("status", ""),
            comments=body.get("comments"),
        )
        return jsonify({"message": f"Leave request {leave.status.value} successfully", "leave": leave.to_dict()})

    @app.route("/api/leave/stats", methods=["GET"], endpoint="leave_stats")
    @login_required
    def stats():
        s = container.leave_service.stats(current_identity())
        return jsonify({"pending": s.pending, "approved": s.approved, "rejected": s.rejected, "totalDays": s.total_days})
