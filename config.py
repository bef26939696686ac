"""
Application configuration module.

Defines environment-aware configuration classes: a shared ``Config`` base
class holds defaults and the ``DevelopmentConfig``, ``TestingConfig`` and
``ProductionConfig`` subclasses override only what differs.  The
``get_config`` factory resolves the class at runtime from an explicit name
or the ``FLASK_ENV`` environment variable.

The JWT signing secret is deliberately *not* part of these classes.  It is
resolved by :func:`load_jwt_secret` when the app is created, and app
creation fails when no secret has been supplied.
"""

from __future__ import annotations

import os
from pathlib import Path

# HS256 secrets must be at least as long as the SHA-256 digest
MIN_SECRET_LENGTH = 32


def _load_secret(raw_env_var: str, path_env_var: str) -> str:
    """
    Load the signing secret from a raw environment variable or a file path.

    The raw variable takes precedence over the path variable so
    orchestrators can inject secrets directly without mounting files.
    """
    raw_secret = os.environ.get(raw_env_var, "").strip()
    if raw_secret:
        return raw_secret

    secret_path = os.environ.get(path_env_var, "").strip()
    if secret_path:
        try:
            return Path(secret_path).read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise RuntimeError(
                f"Unable to read JWT secret file at '{secret_path}' from {path_env_var}."
            ) from exc

    raise RuntimeError(
        f"Missing JWT secret configuration: set {raw_env_var} or {path_env_var}."
    )


def _has_secret_source(raw_env_var: str, path_env_var: str) -> bool:
    """Return True when at least one secret source variable is configured."""
    return bool(
        os.environ.get(raw_env_var, "").strip()
        or os.environ.get(path_env_var, "").strip()
    )


def load_jwt_secret(*, testing: bool) -> str:
    """
    Resolve the JWT signing secret for the selected environment.

    In testing mode the ``TEST_*`` variables are used when configured;
    otherwise the standard ``JWT_SECRET_KEY`` / ``JWT_SECRET_KEY_PATH``
    variables apply.

    Raises:
        RuntimeError: If no secret is configured, the secret file cannot
            be read, or the secret is too short to sign HS256 tokens safely.
    """
    if testing and _has_secret_source("TEST_JWT_SECRET_KEY", "TEST_JWT_SECRET_KEY_PATH"):
        secret = _load_secret("TEST_JWT_SECRET_KEY", "TEST_JWT_SECRET_KEY_PATH")
    else:
        secret = _load_secret("JWT_SECRET_KEY", "JWT_SECRET_KEY_PATH")

    if len(secret.encode("utf-8")) < MIN_SECRET_LENGTH:
        raise RuntimeError(
            f"JWT secret must be at least {MIN_SECRET_LENGTH} bytes long."
        )
    return secret


def _parse_origins(value: str) -> list[str] | str:
    """Split a comma-separated origin list; ``*`` stays a wildcard string."""
    value = value.strip()
    if not value or value == "*":
        return "*"
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Config:
    """Base configuration with default settings."""

    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    # When unset, create_app points this at SQLITE_FILENAME in the app's
    # instance folder
    SQLALCHEMY_DATABASE_URI: str | None = os.environ.get("DATABASE_URL")
    SQLITE_FILENAME: str = "todo.db"
    SQLITE_URI_QUERY: str = ""
    SQLALCHEMY_ENGINE_OPTIONS: dict = {"pool_pre_ping": True}

    # Issued tokens expire this many hours after login
    JWT_EXPIRY_HOURS: int = int(os.environ.get("JWT_EXPIRY_HOURS", "1"))
    # Seconds of tolerance for clock differences when checking ``exp``
    JWT_CLOCK_SKEW_SECONDS: int = int(os.environ.get("JWT_CLOCK_SKEW_SECONDS", "0"))

    # Werkzeug method string; the iteration count is the hashing work factor
    PASSWORD_HASH_METHOD: str = os.environ.get(
        "PASSWORD_HASH_METHOD", "pbkdf2:sha256:600000"
    )

    CORS_ORIGINS: list[str] | str = _parse_origins(os.environ.get("CORS_ORIGINS", "*"))


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Testing environment configuration.

    Uses a separate SQLite database so test runs never touch development
    data, and a cheap hashing work factor so the suite stays fast.
    """

    DEBUG: bool = True
    TESTING: bool = True

    # ``check_same_thread=False`` because the Flask test client may use the
    # connection from a different thread than the one that opened it.
    SQLALCHEMY_DATABASE_URI: str | None = os.environ.get("TEST_DATABASE_URL")
    SQLITE_FILENAME: str = "test_todo.db"
    SQLITE_URI_QUERY: str = "check_same_thread=False"
    PASSWORD_HASH_METHOD: str = "pbkdf2:sha256:1000"


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
