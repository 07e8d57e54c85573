from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_view, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @api_view
    def login():
        data = json_body()
        result = container.auth_service.login(data.get("email", ""), data.get("password", ""))
        return jsonify({"token": result.token, "user": result.user.to_dict()})
