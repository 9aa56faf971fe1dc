from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..common.validators import optional_reference, parse_bool, parse_enum
from ..container import Container
from ..core.enums import Role
from .guards import current_user, install_token_auth, login_required, role_required
from .model import public_user
from .service import UNCHANGED


def register(app: Flask, container: Container) -> None:
    install_token_auth(app, container.token_service)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "service": "gov-payroll"})

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        result = container.auth_service.login(str(data.get("username") or ""), str(data.get("password") or ""))
        app.logger.info("User %s logged in", result.user.username)
        return jsonify({"token": result.token, "user": public_user(result.user)})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        return jsonify(public_user(container.auth_service.me(current_user().user_id)))

    @app.route("/api/auth/change-password", methods=["PUT"], endpoint="auth_change_password")
    @login_required
    def change_password():
        data = json_body()
        container.auth_service.change_password(
            user_id=current_user().user_id,
            old_password=str(data.get("old_password") or ""),
            new_password=str(data.get("new_password") or ""),
        )
        return jsonify({"message": "Password changed successfully"})

    @app.route("/api/auth/users", methods=["GET"], endpoint="users_list")
    @role_required(Role.ADMIN)
    def list_users():
        return jsonify([public_user(u) for u in container.user_service.list_users()])

    @app.route("/api/auth/users", methods=["POST"], endpoint="users_create")
    @role_required(Role.ADMIN)
    def create_user():
        data = json_body()
        user = container.user_service.create_user(
            username=str(data.get("username") or ""),
            password=str(data.get("password") or ""),
            name=str(data.get("name") or ""),
            email=data.get("email"),
            role=parse_enum(Role, data.get("role") or Role.ADMIN.value, "Invalid role"),
            employee_id=optional_reference(data.get("employee_id"), "Employee ID"),
        )
        return jsonify(public_user(user)), 201

    @app.route("/api/auth/users/<int:user_id>", methods=["PUT"], endpoint="users_update")
    @role_required(Role.ADMIN)
    def update_user(user_id: int):
        data = json_body()
        user = container.user_service.update_user(
            current_user_id=current_user().user_id,
            user_id=user_id,
            username=data.get("username"),
            name=data.get("name"),
            email=data.get("email"),
            role=parse_enum(Role, data["role"], "Invalid role") if data.get("role") else None,
            employee_id=(
                optional_reference(data.get("employee_id"), "Employee ID") if "employee_id" in data else UNCHANGED
            ),
            is_active=parse_bool(data["is_active"], "is_active") if "is_active" in data else None,
            password=data.get("password") or None,
        )
        return jsonify(public_user(user))

    @app.route("/api/auth/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    @role_required(Role.ADMIN)
    def delete_user(user_id: int):
        container.user_service.delete_user(current_user_id=current_user().user_id, user_id=user_id)
        return jsonify({"message": "User deleted successfully"})

    @app.route("/api/auth/users/<int:user_id>/toggle", methods=["PATCH"], endpoint="users_toggle")
    @role_required(Role.ADMIN)
    def toggle_user(user_id: int):
        user = container.user_service.toggle_active(current_user_id=current_user().user_id, user_id=user_id)
        return jsonify({"message": "User status toggled successfully", "user": public_user(user)})
