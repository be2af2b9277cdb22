"""Smart Attendance package.

Organized by feature modules (roster, sessions, attendance, reports, ...)
with a thin Flask controller layer over pure service/repository layers.
"""
from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .attendance.controller import register as register_attendance
from .reports.controller import register as register_reports
from .roster.controller import register as register_roster

logger = logging.getLogger(__name__)


def create_app(settings_module: str | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    storage_backend = getattr(settings, "STORAGE_BACKEND", "memory")
    db_config = dict(getattr(settings, "DB_CONFIG", {}))
    logger.info(
        "settings=%s storage=%s db=%s@%s:%s/%s",
        settings_module,
        storage_backend,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if storage_backend == "mysql" and getattr(settings, "AUTO_INIT_DB", False):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        storage_backend=storage_backend,
        db_config=db_config,
        override_target=getattr(settings, "OVERRIDE_TARGET", "first"),
        dashboard_policy=getattr(settings, "DASHBOARD_UNMARKED_POLICY", "collapse"),
        csv_delimiter=getattr(settings, "CSV_DELIMITER", ","),
    )
    app.extensions["smart_attendance"] = container

    register_roster(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
