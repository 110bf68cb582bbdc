from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .sessions.controller import register as register_sessions
from .students.controller import register as register_students

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        container = _build_from_settings(settings, settings_module)

    register_students(app, container)
    register_classes(app, container)
    register_sessions(app, container)
    register_attendance(app, container)

    return app


def _build_from_settings(settings, settings_module: str) -> Container:
    db_config = getattr(settings, "DB_CONFIG")
    admin_db_config = getattr(settings, "ADMIN_DB_CONFIG", None)

    # Helpful startup info to avoid "connected but no tables" confusion.
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    # Schema and seed need DDL rights, so they go through the admin credentials.
    bootstrap_config = admin_db_config or db_config
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(bootstrap_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(bootstrap_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(bootstrap_config, seed_path=DATABASE_DIR / "seed.sql")
        logger.info("demo seed ready")

    return build_container(
        db_config=db_config,
        admin_db_config=admin_db_config,
        schedule_timezone=getattr(settings, "SCHEDULE_TIMEZONE", "UTC"),
        face_threshold=float(getattr(settings, "FACE_MATCH_THRESHOLD", 0.6)),
        descriptor_length=int(getattr(settings, "FACE_DESCRIPTOR_LENGTH", 128)),
        reset_after_seconds=int(getattr(settings, "CHECKIN_RESET_SECONDS", 4)),
    )
