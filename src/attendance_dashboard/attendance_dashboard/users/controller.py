from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import api_view, error_response, form_or_json
from ..container import Container
from ..core.exceptions import AuthenticationError
from ..security.auth import store_session_user


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        payload = form_or_json()
        try:
            s_user = container.auth_service.authenticate(payload.get("username", ""), payload.get("password", ""))
        except AuthenticationError as e:
            return error_response(e)

        session.clear()
        store_session_user(session, s_user)
        return jsonify({"success": True, "user": {"id": s_user.user_id, "name": s_user.name, "role": s_user.role.value}})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    @api_view(container.page_access, "/dashboard")
    def api_me(viewer):
        return jsonify({"success": True, "user": {"id": viewer.user_id, "name": viewer.name, "role": viewer.role.value}})
