from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.decorators import admin_required, login_required
from ..core.enums import Role, UserStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .model import User


def _user_dict(user: User) -> dict:
    return {
        "id": user.user_id,
        "organizationId": user.organization_id,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "fullName": user.full_name,
        "role": user.role.value,
        "status": user.status.value,
        "employeeId": user.employee_id,
        "remote": user.remote,
        "shiftId": user.shift_id,
    }


def _payload() -> dict:
    return request.get_json(silent=True) or request.form.to_dict()


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = _payload()
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = user.user_id
        session["organization_id"] = user.organization_id
        session["name"] = user.full_name
        session["role"] = user.role.value
        return jsonify(
            {
                "success": True,
                "message": "Logged in successfully",
                "user": {
                    "id": user.user_id,
                    "organizationId": user.organization_id,
                    "fullName": user.full_name,
                    "role": user.role.value,
                },
            }
        )

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/users", methods=["GET"], endpoint="users_list")
    @admin_required
    def users_list():
        users = container.user_service.list_users(int(session["organization_id"]))
        return jsonify({"success": True, "data": [_user_dict(u) for u in users]})

    @app.route("/users/me", methods=["GET"], endpoint="users_me")
    @login_required
    def users_me():
        user = container.user_service.get_in_organization(int(session["user_id"]), int(session["organization_id"]))
        return jsonify({"success": True, "data": _user_dict(user)})

    @app.route("/users", methods=["POST"], endpoint="users_create")
    @admin_required
    def users_create():
        data = _payload()
        try:
            role = Role(data.get("role") or Role.EMPLOYEE.value)
        except ValueError:
            raise ValidationError("Role must be 'admin' or 'employee'")

        user = container.user_service.create_account(
            current_role=Role(session["role"]),
            organization_id=int(session["organization_id"]),
            email=data.get("email", ""),
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            password=data.get("password") or None,
            role=role,
            remote=_as_bool(data.get("remote", False)),
        )
        return jsonify({"success": True, "message": "User created", "data": _user_dict(user)}), 201

    @app.route("/users/<int:user_id>/remote", methods=["PATCH"], endpoint="users_set_remote")
    @admin_required
    def users_set_remote(user_id: int):
        data = _payload()
        if "remote" not in data:
            raise ValidationError("remote is required")

        user = container.user_service.set_remote(
            current_role=Role(session["role"]),
            organization_id=int(session["organization_id"]),
            user_id=user_id,
            remote=_as_bool(data["remote"]),
        )
        return jsonify({"success": True, "data": _user_dict(user)})

    @app.route("/users/<int:user_id>/status", methods=["PATCH"], endpoint="users_set_status")
    @admin_required
    def users_set_status(user_id: int):
        data = _payload()
        try:
            status = UserStatus(data.get("status"))
        except ValueError:
            raise ValidationError("Status must be 'active' or 'inactive'")

        user = container.user_service.set_status(
            current_role=Role(session["role"]),
            organization_id=int(session["organization_id"]),
            user_id=user_id,
            status=status,
        )
        return jsonify({"success": True, "data": _user_dict(user)})
