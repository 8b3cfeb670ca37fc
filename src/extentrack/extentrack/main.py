from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .coordinators.controller import register as register_coordinators
from .database.bootstrap import apply_schema, ensure_admin, list_tables
from .identity.controller import register as register_identity
from .projects.controller import register as register_projects
from .reports.controller import register as register_reports
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["CORS_ALLOW_ORIGIN"] = getattr(settings, "CORS_ALLOW_ORIGIN", "*")
    app.json.ensure_ascii = False

    log_level = getattr(settings, "LOG_LEVEL", "DEBUG" if app.config["DEBUG"] else "INFO")
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug(
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
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_admin(
                db_config,
                email=getattr(settings, "ADMIN_EMAIL"),
                password=getattr(settings, "ADMIN_PASSWORD"),
                name=getattr(settings, "ADMIN_NAME", "Administrador"),
            )

        container = build_container(
            db_config=db_config,
            session_ttl_hours=int(getattr(settings, "SESSION_TTL_HOURS", 12)),
        )

    app.extensions["extentrack"] = container

    register_identity(app, container)
    register_coordinators(app, container)
    register_projects(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
