from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .config import get_settings_module
from .core.exceptions import AuthorizationError, StoreError, ValidationError
from .database.bootstrap import apply_schema
from .database.store import RowStore

from .container import build_container, build_store
from .attendance.controller import register as register_attendance
from .leave.controller import register as register_leave
from .notifications.controller import register as register_notifications
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(store: Optional[RowStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    backend = getattr(settings, "STORE_BACKEND", "mysql")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("settings=%s backend=%s", settings_module, backend)

    if store is None:
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
        store = build_store(backend=backend, db_config=db_config)

    container = build_container(store=store)
    app.extensions["hamkke_hr"] = container

    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(AuthorizationError)
    def handle_authorization(e: AuthorizationError):
        return jsonify({"error": str(e)}), 403

    @app.errorhandler(StoreError)
    def handle_store(e: StoreError):
        return jsonify({"error": str(e)}), 502

    register_users(app, container)
    register_attendance(app, container)
    register_leave(app, container)
    register_notifications(app, container)
    register_reports(app, container)

    return app
