from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.decorators import admin_required, login_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def _scope() -> dict:
        return {"current_role": Role(session["role"]), "organization_id": int(session["organization_id"])}

    @app.route("/shift", methods=["GET"], endpoint="shift_list")
    @login_required
    def shift_list():
        shifts = container.shift_service.list_shifts(int(session["organization_id"]))
        return jsonify({"success": True, "data": [s.to_dict() for s in shifts]})

    @app.route("/shift/me", methods=["GET"], endpoint="shift_me")
    @login_required
    def shift_me():
        shift = container.shift_service.resolve_for_user(int(session["user_id"]), int(session["organization_id"]))
        return jsonify({"success": True, "data": shift.to_dict()})

    @app.route("/shift/<shift_id>", methods=["GET"], endpoint="shift_get")
    @login_required
    def shift_get(shift_id: str):
        shift = container.shift_service.get_shift(shift_id, int(session["organization_id"]))
        return jsonify({"success": True, "data": shift.to_dict()})

    @app.route("/shift", methods=["POST"], endpoint="shift_create")
    @admin_required
    def shift_create():
        data = _payload()
        shift = container.shift_service.create_shift(
            **_scope(),
            name=data.get("name", ""),
            start_time=data.get("startTime", ""),
            end_time=data.get("endTime", ""),
            late_time=data.get("lateTime", ""),
            days=data.get("days"),
        )
        return jsonify({"success": True, "message": "Shift created", "data": shift.to_dict()}), 201

    @app.route("/shift/<shift_id>", methods=["PUT"], endpoint="shift_update")
    @admin_required
    def shift_update(shift_id: str):
        data = _payload()
        shift = container.shift_service.update_shift(
            **_scope(),
            shift_id=shift_id,
            name=data.get("name"),
            start_time=data.get("startTime"),
            end_time=data.get("endTime"),
            late_time=data.get("lateTime"),
            days=data.get("days"),
        )
        return jsonify({"success": True, "message": "Shift updated", "data": shift.to_dict()})

    @app.route("/shift/<shift_id>", methods=["DELETE"], endpoint="shift_delete")
    @admin_required
    def shift_delete(shift_id: str):
        container.shift_service.delete_shift(**_scope(), shift_id=shift_id)
        return jsonify({"success": True, "message": "Shift deleted"})

    @app.route("/shift/assign", methods=["POST"], endpoint="shift_assign")
    @admin_required
    def shift_assign():
        data = _payload()
        try:
            user_id = int(data.get("userId"))
        except (TypeError, ValueError):
            raise ValidationError("userId is required")
        if data.get("shiftId") in (None, ""):
            raise ValidationError("shiftId is required")

        container.shift_service.assign_to_user(**_scope(), user_id=user_id, shift_id=data["shiftId"])
        return jsonify({"success": True, "message": "Shift assigned"})

    @app.route("/shift/assign/<int:user_id>", methods=["DELETE"], endpoint="shift_unassign")
    @admin_required
    def shift_unassign(user_id: int):
        container.shift_service.remove_from_user(**_scope(), user_id=user_id)
        return jsonify({"success": True, "message": "Shift assignment removed; default shift applies"})
