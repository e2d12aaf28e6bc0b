from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.decorators import admin_required, login_required
from ..core.enums import Role
from ..container import Container
from .model import Organization


def _organization_dict(org: Organization) -> dict:
    office = org.office_location
    return {
        "id": org.organization_id,
        "companyName": org.company_name,
        "isActive": org.is_active,
        "officeLocation": (
            {
                "latitude": office.latitude,
                "longitude": office.longitude,
                "address": office.address,
                "radius": office.radius,
            }
            if office
            else None
        ),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/organization", methods=["GET"], endpoint="organization_get")
    @login_required
    def organization_get():
        org = container.organization_service.get(int(session["organization_id"]))
        return jsonify({"success": True, "data": _organization_dict(org)})

    @app.route("/organization/office-location", methods=["PUT"], endpoint="organization_office_location")
    @admin_required
    def organization_office_location():
        data = request.get_json(silent=True) or request.form.to_dict()
        org = container.organization_service.update_office_location(
            current_role=Role(session["role"]),
            organization_id=int(session["organization_id"]),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            address=data.get("address"),
            radius=data.get("radius"),
        )
        return jsonify({"success": True, "message": "Office location updated", "data": _organization_dict(org)})
