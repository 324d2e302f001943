from __future__ import annotations

import importlib

from dotenv import load_dotenv
from flask import Flask

from .app_logger import setup_logging
from .assignments.controller import register as register_assignments
from .attendance.controller import register as register_attendance
from .common.responses import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .courses.controller import register as register_courses
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.controller import register as register_enrollments
from .instructors.controller import register as register_instructors
from .scheduling.status_reset import start_status_reset_scheduler
from .sections.controller import register as register_sections
from .students.controller import register as register_students


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["QR_BOX_SIZE"] = int(getattr(settings, "QR_BOX_SIZE", 10))

    logger = setup_logging(getattr(settings, "LOG_LEVEL", None))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(conn)
            logger.info("Schema ready (tables=%s)", len(list_tables(conn)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(conn)
            logger.info("Demo seed ready")
        container = build_container(db_config=db_config)

    register_error_handlers(app)
    register_students(app, container)
    register_instructors(app, container)
    register_courses(app, container)
    register_assignments(app, container)
    register_sections(app, container)
    register_enrollments(app, container)
    register_attendance(app, container)

    if getattr(settings, "STATUS_RESET_ENABLED", False) and not app.config["TESTING"]:
        start_status_reset_scheduler(
            container.status_reset_job,
            interval_seconds=int(getattr(settings, "STATUS_RESET_INTERVAL_SECONDS", 60)),
        )

    return app
