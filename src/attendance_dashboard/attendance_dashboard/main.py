from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .core.constants import DEFAULT_SALARY_CALC_DAY
from .database.bootstrap import apply_schema, ensure_demo_data, list_tables
from .database.connection import DBConfig
from .payroll.controller import register as register_payroll
from .schedules.controller import register as register_schedules
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    container = build_container(
        db_config=db_config,
        auth_key=getattr(settings, "AUTH_KEY", None),
        salary_calc_day=int(getattr(settings, "SALARY_CALC_DAY", DEFAULT_SALARY_CALC_DAY)),
        rbac_config=getattr(settings, "RBAC_CONFIG", None),
    )

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    if getattr(settings, "AUTO_SEED_DB", False):
        ensure_demo_data(db_config, container.codecs)

    register_users(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_schedules(app, container)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error")
        return jsonify({"success": False, "message": "Internal server error"}), 500

    return app
