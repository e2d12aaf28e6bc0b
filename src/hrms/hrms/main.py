from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

import structlog
from dotenv import load_dotenv
from flask import Flask, jsonify, send_from_directory

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.decorators import login_required
from .common.logging import install_request_id, setup_logging
from .container import Container, build_container
from .core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
)
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables
from .organizations.controller import register as register_organizations
from .shifts.controller import register as register_shifts
from .users.controller import register as register_users

log = structlog.get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

# Most specific first; anything else derived from DomainError is a 400.
_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (AlreadyCheckedInError, 409),
    (AlreadyCheckedOutError, 409),
    (ConflictError, 409),
)


def status_for(error: DomainError) -> int:
    for kind, status in _STATUS_BY_ERROR:
        if isinstance(error, kind):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        status = status_for(e)
        log.info("request.rejected", error=type(e).__name__, status=status, message=str(e))
        return jsonify({"success": False, "message": str(e)}), status


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    upload_dir = str(getattr(settings, "UPLOAD_DIR", "uploads"))
    app.config["UPLOAD_DIR"] = upload_dir

    setup_logging(getattr(settings, "LOG_LEVEL", None))
    install_request_id(app)
    register_error_handlers(app)

    if container is None:
        log.info(
            "app.starting",
            settings=settings_module,
            db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        )
        container = build_container(
            db_config=db_config,
            upload_dir=upload_dir,
            default_radius_m=float(getattr(settings, "OFFICE_LOCATION_RADIUS", 100)),
            selfie_required=bool(getattr(settings, "SELFIE_REQUIRED", False)),
        )
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            log.info("database.ready", tables=len(list_tables(container.conn)))

    @app.route("/uploads/selfies/<path:filename>", endpoint="selfie_file")
    @login_required
    def selfie_file(filename: str):
        return send_from_directory(Path(upload_dir, "selfies").resolve(), filename)

    register_users(app, container)
    register_organizations(app, container)
    register_shifts(app, container)
    register_attendance(app, container)
    register_dashboard(app, container)

    return app
