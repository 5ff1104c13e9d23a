from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .bookings.controller import register as register_bookings
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .core.exceptions import StoreFailure
from .database.bootstrap import apply_schema, list_tables
from .travel_requests.controller import register as register_travel_requests
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _bootstrap_admin(container: Container, settings) -> None:
    admin = getattr(settings, "BOOTSTRAP_ADMIN", None)
    if not admin:
        return
    try:
        container.user_service.ensure_bootstrap_admin(
            user_id=admin["user_id"],
            password=admin["password"],
            name=admin.get("name", "Admin"),
            department=admin.get("department", "Administration"),
        )
    except StoreFailure:
        logger.exception("Could not provision the bootstrap admin")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
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
        container = build_container(db_config=db_config)

    # Provisioning runs once here, never from a request handler.
    _bootstrap_admin(container, settings)

    register_users(app, container)
    register_bookings(app, container)
    register_travel_requests(app, container)

    @app.errorhandler(StoreFailure)
    def store_failure(e):
        app.logger.error("Store failure: %s", e)
        return "Server error", 500

    return app
