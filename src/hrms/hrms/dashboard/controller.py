from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.decorators import admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @admin_required
    def dashboard():
        stats = container.dashboard_service.get_stats(int(session["organization_id"]))
        return jsonify(
            {
                "success": True,
                "data": {"users": stats.users, "attendance": stats.attendance, "recent": stats.recent},
            }
        )
