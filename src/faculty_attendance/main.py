from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .database.connection import DBConfig
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .leaves.controller import register as register_leaves
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code


def _seed_admin(settings, db_config: dict) -> None:
    email = getattr(settings, "ADMIN_EMAIL", "")
    password = getattr(settings, "ADMIN_PASSWORD", "")
    if not email or not password:
        logger.warning("AUTO_SEED_DB is set but ADMIN_EMAIL/ADMIN_PASSWORD are empty; skipping admin seed")
        return
    ensure_admin_user(
        db_config,
        fid=getattr(settings, "ADMIN_FID", "ADMIN001"),
        name=getattr(settings, "ADMIN_NAME", "Administrator"),
        email=email,
        password=password,
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            _seed_admin(settings, db_config)

        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET", None) or app.secret_key,
            jwt_expires_hours=int(getattr(settings, "JWT_EXPIRES_HOURS", 8)),
        )

    register_auth(app, container)
    register_users(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    _register_error_handlers(app)

    return app
