from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, request
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .container import Container, build_container
from .common.web import fail
from .database.bootstrap import apply_schema, list_tables
from .attendance.controller import register as register_attendance
from .staff.controller import register as register_staff
from .timetable.controller import register as register_timetable


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory; pass a prebuilt container to skip the MySQL wiring (tests)."""

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, settings=settings)

    register_staff(app, container)
    register_attendance(app, container)
    register_timetable(app, container)

    @app.errorhandler(Exception)
    def unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return e
        app.logger.exception("unhandled error on %s %s", request.method, request.path)
        return fail("Something went wrong. Please try again.", 500)

    return app
