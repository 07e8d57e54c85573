from __future__ import annotations

from flask import Flask, jsonify

from ..auth.middleware import current_user
from ..common.http import api_view, json_body
from ..container import Container
from ..core.enums import Role
from .service import NewFaculty


def register(app: Flask, container: Container) -> None:
    guard = container.auth_guard

    @app.route("/api/faculty/register", methods=["POST"], endpoint="register_faculty")
    @api_view
    def register_faculty():
        data = json_body()
        container.user_service.register_faculty(
            NewFaculty(
                name=data.get("name", ""),
                email=data.get("email", ""),
                password=data.get("password", ""),
                fid=str(data.get("fid") or ""),
                gender=data.get("gender"),
                dob=data.get("dob"),
                phone=data.get("phone"),
            )
        )
        return jsonify({"message": "Faculty registered successfully"}), 201

    @app.route("/api/faculty/profile", methods=["GET"], endpoint="get_profile")
    @guard.token_required
    @guard.roles_required(Role.FACULTY)
    @api_view
    def get_profile():
        profile = container.user_service.get_profile(current_user().id)
        return jsonify(profile.to_dict())

    @app.route("/api/faculty/profile", methods=["PUT"], endpoint="update_profile")
    @guard.token_required
    @guard.roles_required(Role.FACULTY)
    @api_view
    def update_profile():
        data = json_body()
        profile = container.user_service.update_profile(current_user().id, phone=data.get("phone"))
        return jsonify({"message": "Profile updated successfully", "facultyProfile": profile.to_dict()})

    @app.route("/api/faculty/changePassword", methods=["POST"], endpoint="change_password")
    @guard.token_required
    @guard.roles_required(Role.FACULTY)
    @api_view
    def change_password():
        data = json_body()
        container.user_service.change_password(current_user().id, data.get("newPassword", ""))
        return jsonify({"message": "Password changed successfully"})

    @app.route("/api/admin/faculty", methods=["GET"], endpoint="admin_list_faculty")
    @guard.token_required
    @guard.roles_required(Role.ADMIN)
    @api_view
    def admin_list_faculty():
        return jsonify([u.to_dict() for u in container.user_service.list_faculty()])

    @app.route("/api/admin/faculty/<faculty_id>", methods=["DELETE"], endpoint="admin_delete_faculty")
    @guard.token_required
    @guard.roles_required(Role.ADMIN)
    @api_view
    def admin_delete_faculty(faculty_id: str):
        container.user_service.delete_faculty(current_role=current_user().role, fid=faculty_id)
        return jsonify({"message": "Faculty and related attendance records deleted successfully"})
