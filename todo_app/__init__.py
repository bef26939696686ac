"""
Flask application factory for the todo API.

``create_app`` builds the application in a fixed order: configuration and
signing secret, extensions (SQLAlchemy, CORS), the account/task stores and
the authentication gate bound to this app's database handle, error
handlers, blueprints, and finally the database schema.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Flask, Response, request
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy

from config import get_config, load_jwt_secret

db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def default_sqlite_uri(instance_path: str, filename: str, query: str = "") -> str:
    """Build a SQLite URI for *filename* inside the app's instance folder."""
    uri = f"sqlite:///{Path(instance_path) / filename}"
    return f"{uri}?{query}" if query else uri


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if sqlite_path == ":memory:":
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


def _log_request(response: Response) -> Response:
    logger.info("%s %s -> %s", request.method, request.path, response.status_code)
    return response


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the todo application.

    Args:
        config_name: Configuration environment name (``"development"``,
            ``"testing"``, ``"production"``).  If None, uses the
            ``FLASK_ENV`` environment variable.

    Returns:
        Configured Flask application instance.

    Raises:
        RuntimeError: If the JWT signing secret is not configured.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.config["JWT_SECRET_KEY"] = load_jwt_secret(testing=bool(app.config.get("TESTING")))

    logger.info("Creating todo app with config: %s", config_class.__name__)

    os.makedirs(app.instance_path, exist_ok=True)
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        app.config["SQLALCHEMY_DATABASE_URI"] = default_sqlite_uri(
            app.instance_path,
            app.config["SQLITE_FILENAME"],
            app.config.get("SQLITE_URI_QUERY", ""),
        )
    _ensure_sqlite_db_parent_exists(app.config["SQLALCHEMY_DATABASE_URI"])

    db.init_app(app)
    CORS(app, origins=app.config["CORS_ORIGINS"])

    from .auth import AUTH_GATE_KEY, AuthGate
    from .errors import register_error_handlers
    from .routes.tasks import TASK_STORE_KEY, tasks_bp
    from .routes.users import users_bp
    from .stores import AccountStore, TaskStore

    app.extensions[TASK_STORE_KEY] = TaskStore(db)
    app.extensions[AUTH_GATE_KEY] = AuthGate(
        AccountStore(db),
        secret=app.config["JWT_SECRET_KEY"],
        expiry_hours=app.config["JWT_EXPIRY_HOURS"],
        clock_skew_seconds=app.config["JWT_CLOCK_SKEW_SECONDS"],
        hash_method=app.config["PASSWORD_HASH_METHOD"],
    )

    register_error_handlers(app)
    app.after_request(_log_request)

    app.register_blueprint(tasks_bp)
    app.register_blueprint(users_bp, url_prefix="/user")

    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

    return app


def dispose_engine(app: Flask) -> None:
    """Close every pooled connection held by *app*'s engine."""
    with app.app_context():
        db.engine.dispose()
    logger.info("Database connection pool disposed")
