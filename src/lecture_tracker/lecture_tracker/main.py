from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .container import build_container
from .core.constants import DEFAULT_EVENT_QUEUE_SIZE
from .core.exceptions import DuplicateCodeError, NotFoundError, StorageError, ValidationError
from .database.bootstrap import apply_schema, missing_tables
from .events.controller import register as register_events
from .lectures.controller import register as register_lectures
from .schedules.controller import register as register_schedules
from .statistics.controller import register as register_statistics
from .subjects.controller import register as register_subjects
from .tasks.controller import register as register_tasks

SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "STORAGE_BACKEND",
    "DATA_DIR",
    "DB_CONFIG",
    "AUTO_INIT_DB",
    "EVENT_QUEUE_SIZE",
    "EVENT_HEARTBEAT_SECONDS",
)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(debug: bool) -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name) for name in SETTING_NAMES if hasattr(settings, name)}
    values["SETTINGS_MODULE"] = settings_module
    values.update(overrides or {})
    return values


def _register_error_handlers(app: Flask) -> None:
    def error(message: str, status: int):
        return jsonify({"error": message}), status

    @app.errorhandler(DuplicateCodeError)
    def handle_duplicate(exc: DuplicateCodeError):
        return error(str(exc), 409)

    @app.errorhandler(ValidationError)
    def handle_validation(exc: ValidationError):
        app.logger.warning("Rejected request: %s", exc)
        return error(str(exc), 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc: NotFoundError):
        return error(str(exc), 404)

    @app.errorhandler(StorageError)
    def handle_storage(exc: StorageError):
        app.logger.error("Storage failure: %s", exc)
        return error("Storage temporarily unavailable", 503)

    @app.errorhandler(HTTPException)
    def handle_http(exc: HTTPException):
        return error(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        app.logger.exception("Unhandled error")
        return error("Internal server error", 500)


def create_app(settings_overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(settings_overrides)
    debug = bool(settings.get("DEBUG", False))
    configure_logging(debug)

    app = Flask(__name__)
    app.secret_key = settings.get("SECRET_KEY")
    app.config["DEBUG"] = debug
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["EVENT_HEARTBEAT_SECONDS"] = float(settings.get("EVENT_HEARTBEAT_SECONDS", 15.0))

    backend = str(settings.get("STORAGE_BACKEND", "json")).lower()
    db_config = dict(settings.get("DB_CONFIG") or {})
    app.logger.info("settings=%s backend=%s", settings["SETTINGS_MODULE"], backend)

    if backend == "mysql" and settings.get("AUTO_INIT_DB"):
        apply_schema(db_config)
        missing = missing_tables(db_config)
        if missing:
            app.logger.warning("schema applied but tables are missing: %s", ", ".join(missing))
        else:
            app.logger.info(
                "schema ready on %s@%s/%s", db_config.get("user"), db_config.get("host"), db_config.get("database")
            )

    container = build_container(
        backend=backend,
        data_dir=settings.get("DATA_DIR"),
        db_config=db_config,
        event_queue_size=int(settings.get("EVENT_QUEUE_SIZE", DEFAULT_EVENT_QUEUE_SIZE)),
    )
    app.extensions["lecture_tracker"] = container

    _register_error_handlers(app)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    register_subjects(app, container)
    register_lectures(app, container)
    register_schedules(app, container)
    register_tasks(app, container)
    register_statistics(app, container)
    register_events(app, container)

    return app
