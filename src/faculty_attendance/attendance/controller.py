from __future__ import annotations

from flask import Flask, jsonify

from ..auth.middleware import current_user
from ..common.http import api_view
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    guard = container.auth_guard

    @app.route("/api/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @guard.token_required
    @guard.roles_required(Role.ADMIN)
    @api_view
    def admin_dashboard():
        return jsonify(container.attendance_service.dashboard().to_dict())

    @app.route("/api/admin/<faculty_id>/facultyDetails", methods=["GET"], endpoint="admin_faculty_details")
    @guard.token_required
    @guard.roles_required(Role.ADMIN)
    @api_view
    def admin_faculty_details(faculty_id: str):
        return jsonify(container.attendance_service.faculty_details(faculty_id))

    @app.route("/api/faculty/<faculty_id>/attendanceAndLeave", methods=["GET"], endpoint="attendance_and_leave")
    @guard.token_required
    @guard.roles_required(Role.FACULTY, Role.ADMIN)
    @api_view
    def attendance_and_leave(faculty_id: str):
        user = current_user()
        data = container.attendance_service.attendance_and_leave(
            current_role=user.role,
            current_id=user.id,
            faculty_id=faculty_id,
        )
        return jsonify(data)

    @app.route("/api/faculty/attendance", methods=["POST"], endpoint="mark_attendance")
    @guard.token_required
    @guard.roles_required(Role.FACULTY)
    @api_view
    def mark_attendance():
        record = container.attendance_service.mark_present(current_user().id)
        return jsonify({"message": "Attendance marked", "attendance": record.to_dict()})
