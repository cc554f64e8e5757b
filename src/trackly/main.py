from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .academic_periods.controller import register as register_academic_periods
from .attendance.controller import register as register_attendance
from .auto_attendance.controller import register as register_auto_attendance
from .common.logging_config import configure_logging
from .common.web import fail
from .container import Container, build_container
from .core.constants import MAX_UPLOAD_BYTES
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ScheduleParseError,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .holidays.controller import register as register_holidays
from .notifications.controller import register as register_notifications
from .schedules.controller import register as register_schedules
from .subjects.controller import register as register_subjects
from .todos.controller import register as register_todos
from .uploads.controller import register as register_uploads
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail(str(e), status=400, errors=e.errors)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return fail(str(e), status=401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return fail(str(e), status=403)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return fail(str(e), status=404)

    @app.errorhandler(ScheduleParseError)
    def _schedule_parse(e: ScheduleParseError):
        return fail(str(e), status=422)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return fail(e.description or e.name, status=e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("Unhandled error")
        return fail("Server error", status=500)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    max_upload = int(getattr(settings, "MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES))
    # a little headroom for the multipart envelope; the service enforces the exact limit
    app.config["MAX_CONTENT_LENGTH"] = max_upload + 64 * 1024

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            config = DBConfig.from_dict(db_config)
            apply_schema(config)
            logger.info("Schema ready (tables=%d)", len(list_tables(config)))

        container = build_container(
            db_config=db_config,
            smtp_config=getattr(settings, "SMTP_CONFIG", {}),
            upload_dir=getattr(settings, "UPLOAD_DIR", "uploads"),
            max_upload_bytes=max_upload,
            frontend_url=getattr(settings, "FRONTEND_URL", "http://localhost:3000"),
        )

    register_error_handlers(app)
    register_users(app, container)
    register_subjects(app, container)
    register_academic_periods(app, container)
    register_holidays(app, container)
    register_schedules(app, container)
    register_attendance(app, container)
    register_auto_attendance(app, container)
    register_notifications(app, container)
    register_uploads(app, container)
    register_todos(app, container)

    if bool(getattr(settings, "SCHEDULER_ENABLED", False)):
        from .scheduler import start_scheduler

        start_scheduler(container)

    return app
