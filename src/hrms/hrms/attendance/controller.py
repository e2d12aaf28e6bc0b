from __future__ import annotations

from datetime import date
from typing import Optional

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.decorators import admin_required, login_required
from ..common.validators import require_coordinates
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from ..uploads.model import SelfieUpload
from .model import GeoPoint


def _parse_position() -> GeoPoint:
    form = request.form if request.form else (request.get_json(silent=True) or {})
    if form.get("latitude") in (None, "") or form.get("longitude") in (None, ""):
        raise ValidationError("Latitude and longitude are required")

    lat, lon = require_coordinates(form.get("latitude"), form.get("longitude"))
    address = form.get("address")
    address = (address.strip() if isinstance(address, str) else "") or None
    return GeoPoint(latitude=lat, longitude=lon, address=address)


def _parse_selfie() -> Optional[SelfieUpload]:
    f = request.files.get("selfie")
    if f is None or not f.filename:
        return None
    return SelfieUpload(data=f.read(), filename=f.filename, content_type=f.mimetype)


def _parse_optional_date(name: str) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{name} must be a date in YYYY-MM-DD format")


def register(app: Flask, container: Container) -> None:
    def _selection() -> dict:
        """Query-string filters; employees are always pinned to themselves."""
        user_id: Optional[int] = None
        if session.get("role") == Role.ADMIN.value:
            raw = request.args.get("userId")
            if raw:
                try:
                    user_id = int(raw)
                except ValueError:
                    raise ValidationError("userId must be an integer")
        else:
            user_id = int(session["user_id"])

        return {
            "user_id": user_id,
            "start": _parse_optional_date("startDate"),
            "end": _parse_optional_date("endDate"),
        }

    @app.route("/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def attendance_check_in():
        record = container.attendance_service.check_in(
            int(session["user_id"]),
            int(session["organization_id"]),
            _parse_position(),
            selfie=_parse_selfie(),
        )
        return jsonify({"success": True, "message": "Checked in successfully", "data": record.to_dict()}), 201

    @app.route("/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def attendance_check_out():
        record = container.attendance_service.check_out(
            int(session["user_id"]),
            int(session["organization_id"]),
            _parse_position(),
            selfie=_parse_selfie(),
        )
        return jsonify({"success": True, "message": "Checked out successfully", "data": record.to_dict()})

    @app.route("/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        record = container.attendance_service.get_today_record(int(session["user_id"]), now_local().date())
        return jsonify({"success": True, "data": record.to_dict() if record else None})

    @app.route("/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        records = container.attendance_service.list_records(int(session["organization_id"]), **_selection())
        return jsonify({"success": True, "data": [r.to_dict() for r in records]})

    @app.route("/attendance/export", methods=["GET"], endpoint="attendance_export")
    @login_required
    def attendance_export():
        sel = _selection()
        content = container.report_service.export_csv(organization_id=int(session["organization_id"]), **sel)

        suffix = "_".join(d.strftime("%Y%m%d") for d in (sel["start"], sel["end"]) if d)
        filename = f"attendance_{suffix}.csv" if suffix else "attendance.csv"
        return app.response_class(
            content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def attendance_summary():
        data = container.report_service.build_attendance_report(
            organization_id=int(session["organization_id"]), **_selection()
        )
        return jsonify({"success": True, "data": data.summary})

    @app.route("/attendance/map-locations", methods=["GET"], endpoint="attendance_map_locations")
    @admin_required
    def attendance_map_locations():
        points = container.attendance_service.map_locations(
            int(session["organization_id"]),
            start=_parse_optional_date("startDate"),
            end=_parse_optional_date("endDate"),
        )
        return jsonify(
            {
                "success": True,
                "data": [
                    {
                        "id": p.attendance_id,
                        "userId": p.user_id,
                        "date": p.work_date.isoformat(),
                        "checkInTime": p.check_in_time.isoformat() if p.check_in_time else None,
                        "latitude": p.latitude,
                        "longitude": p.longitude,
                        "address": p.address,
                        "attendanceStatus": p.attendance_status.value if p.attendance_status else None,
                    }
                    for p in points
                ],
            }
        )
