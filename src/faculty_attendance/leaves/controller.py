from __future__ import annotations

from flask import Flask, jsonify

from ..auth.middleware import current_user
from ..common.datetime_utils import parse_iso_date
from ..common.http import api_view, error_response, json_body
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    guard = container.auth_guard

    @app.route("/api/faculty/leave", methods=["POST"], endpoint="apply_leave")
    @guard.token_required
    @guard.roles_required(Role.FACULTY)
    @api_view
    def apply_leave():
        data = json_body()
        from_s, to_s, reason = data.get("fromDate"), data.get("toDate"), data.get("leaveReason")
        if not from_s or not to_s or not reason:
            return error_response("Please provide all required details", 400)

        user = current_user()
        leave = container.leave_service.apply(
            current_role=user.role,
            faculty_id=user.id,
            from_date=parse_iso_date(str(from_s), "fromDate"),
            to_date=parse_iso_date(str(to_s), "toDate"),
            leave_reason=str(reason),
        )
        return jsonify({"message": "Leave application submitted successfully", "newLeave": leave.to_dict()}), 201

    @app.route("/api/admin/leave/pending", methods=["GET"], endpoint="admin_pending_leaves")
    @guard.token_required
    @guard.roles_required(Role.ADMIN)
    @api_view
    def admin_pending_leaves():
        return jsonify(container.leave_service.list_pending_with_faculty())

    @app.route("/api/admin/leave/<leave_id>", methods=["PUT"], endpoint="admin_decide_leave")
    @guard.token_required
    @guard.roles_required(Role.ADMIN)
    @api_view
    def admin_decide_leave(leave_id: str):
        user = current_user()
        status = json_body().get("status")
        leave = container.leave_service.decide(
            current_role=user.role,
            admin_id=user.id,
            leave_id=leave_id,
            status=str(status or ""),
        )
        return jsonify({"message": f"Leave request has been {leave.status.value.lower()}", "leave": leave.to_dict()})
