from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .common.http import (
    PayrollJSONProvider,
    register_cors,
    register_error_handlers,
    register_request_logging,
)
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_default_admin, list_tables
from .database.connection import DBConfig

from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .overtime.controller import register as register_overtime
from .positions.controller import register as register_positions
from .reports.controller import register as register_reports
from .salary.controller import register as register_salary
from .users.controller import register as register_users

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _bootstrap_database(app: Flask, settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        if app.config["DEBUG"]:
            print(f"[gov-payroll] schema ready (tables={len(list_tables(db_config))})")
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        if app.config["DEBUG"]:
            print("[gov-payroll] demo seed ready")
    if ensure_default_admin(db_config):
        app.logger.warning("Created default admin account; change its password")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)
    app.json = PayrollJSONProvider(app)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    jwt_secret = getattr(settings, "JWT_SECRET_KEY", None)
    if not jwt_secret:
        raise RuntimeError("JWT_SECRET_KEY is not configured")

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        if app.config["DEBUG"]:
            print(
                "[gov-payroll] settings=", settings_module,
                " db=", DBConfig.from_dict(db_config).describe(),
            )
        _bootstrap_database(app, settings, db_config)
        container = build_container(
            db_config=db_config,
            jwt_secret=jwt_secret,
            token_ttl_minutes=int(getattr(settings, "TOKEN_TTL_MINUTES", 60)),
            salary_year_min=int(getattr(settings, "SALARY_YEAR_MIN", 2000)),
            salary_year_max=int(getattr(settings, "SALARY_YEAR_MAX", 2100)),
            wkhtmltopdf_path=getattr(settings, "WKHTMLTOPDF_PATH", None),
        )

    register_error_handlers(app)
    register_cors(app, getattr(settings, "CORS_ORIGINS", []))
    register_request_logging(app)

    # users first: it installs the bearer-token hook the other blueprints rely on
    register_users(app, container)
    register_positions(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_overtime(app, container)
    register_salary(app, container)
    register_reports(app, container)

    return app
