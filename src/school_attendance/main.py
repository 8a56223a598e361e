from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from .app_settings.controller import register as register_settings
from .attendance.controller import register as register_attendance
from .certificates.controller import register as register_certificates
from .common.web import fail
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import MAX_CERTIFICATE_BYTES
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    NotFoundError,
    ValidationError,
)
from .courses.controller import register as register_courses
from .database.bootstrap import apply_schema, list_tables
from .database.demo import seed_demo_data
from .news.controller import register as register_news
from .reports.controller import register as register_reports
from .users.controller import register as register_users


def register_error_handlers(app: Flask) -> None:
    """Domain errors become JSON messages; backend failures get a generic message and a log entry."""

    @app.errorhandler(ValidationError)
    def _validation(e):
        return fail(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e):
        return fail(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e):
        return fail(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return fail(str(e), 404)

    @app.errorhandler(BackendError)
    def _backend(e):
        app.logger.exception("Backend failure: %s", e)
        return fail("The operation could not be completed. Please try again.", 502)

    @app.errorhandler(RequestEntityTooLarge)
    def _too_large(e):
        return fail("The file is too large. Maximum 5MB", 413)

    @app.errorhandler(HTTPException)
    def _http(e):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e):
        app.logger.exception("Unhandled error")
        if bool(app.config.get("DEBUG", False)):
            return fail(f"System error: {e}", 500)
        return fail("System error", 500)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["UPLOAD_URL_PREFIX"] = getattr(settings, "UPLOAD_URL_PREFIX", "/uploads")
    # Multipart overhead on top of the certificate limit.
    app.config["MAX_CONTENT_LENGTH"] = MAX_CERTIFICATE_BYTES + 64 * 1024

    backend = getattr(settings, "BACKEND", "mysql")
    db_config = getattr(settings, "DB_CONFIG", None)

    if app.config["DEBUG"]:
        target = "memory"
        if backend == "mysql" and db_config:
            target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
        app.logger.info("[school-attendance] settings=%s backend=%s", settings_module, target)

    if container is None:
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            app.logger.info("[school-attendance] schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            backend=backend,
            db_config=db_config,
            upload_dir=getattr(settings, "UPLOAD_DIR", None) or None,
            url_prefix=app.config["UPLOAD_URL_PREFIX"],
        )

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_demo_data(container)

    app.extensions["container"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_courses(app, container)
    register_attendance(app, container)
    register_certificates(app, container)
    register_reports(app, container)
    register_news(app, container)
    register_settings(app, container)

    return app
