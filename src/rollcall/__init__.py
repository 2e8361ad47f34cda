"""Roll-call reports package.

Feature modules (students, attendance, reports) each own a repository
interface, its MySQL implementation and a thin Flask controller; the
reporting services sit between them and fall back to a local JSON cache
when the database is unreachable.
"""
from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging import configure_logging, get_logger
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .reports.controller import register as register_reports
from .students.controller import register as register_students

logger = get_logger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(_e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return jsonify({"error": "Method not allowed"}), 405


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Passing ``container`` skips database bootstrap and wiring (used by tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        target = DBConfig.from_mapping(db_config)
        logger.info("settings=%s db=%s", settings_module, target.describe())

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(target)
            logger.info("schema ready (tables=%s)", len(list_tables(target)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(target)

        container = build_container(db_config=db_config, cache_dir=getattr(settings, "CACHE_DIR"))

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    _register_error_handlers(app)
    register_students(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
