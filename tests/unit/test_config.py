"""
Unit tests for configuration loading.

The signing secret has no default: these tests pin down where it is read
from and that app creation refuses to start without one.
"""

from __future__ import annotations

import pytest

from config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    get_config,
    load_jwt_secret,
)
from tests.helpers import TEST_JWT_SECRET

pytestmark = pytest.mark.unit

SECRET_VARS = (
    "JWT_SECRET_KEY",
    "JWT_SECRET_KEY_PATH",
    "TEST_JWT_SECRET_KEY",
    "TEST_JWT_SECRET_KEY_PATH",
)
PROD_SECRET = "production-secret-value-that-is-long-enough-42"


@pytest.fixture
def clean_secret_env(monkeypatch):
    """Remove every secret variable for the duration of a test."""
    for name in SECRET_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_missing_secret_raises(clean_secret_env):
    """Test that no configured secret is a startup error, not a default."""
    with pytest.raises(RuntimeError, match="Missing JWT secret"):
        load_jwt_secret(testing=False)


def test_raw_secret_is_used(clean_secret_env):
    """Test that JWT_SECRET_KEY is read directly."""
    clean_secret_env.setenv("JWT_SECRET_KEY", PROD_SECRET)

    assert load_jwt_secret(testing=False) == PROD_SECRET


def test_secret_file_is_read(clean_secret_env, tmp_path):
    """Test that JWT_SECRET_KEY_PATH is read and stripped."""
    # Arrange
    secret_file = tmp_path / "jwt_secret"
    secret_file.write_text(PROD_SECRET + "\n", encoding="utf-8")
    clean_secret_env.setenv("JWT_SECRET_KEY_PATH", str(secret_file))

    # Act & Assert
    assert load_jwt_secret(testing=False) == PROD_SECRET


def test_raw_secret_takes_precedence_over_file(clean_secret_env, tmp_path):
    """Test that the raw variable wins when both sources are set."""
    secret_file = tmp_path / "jwt_secret"
    secret_file.write_text("file-secret-file-secret-file-secret-123", encoding="utf-8")
    clean_secret_env.setenv("JWT_SECRET_KEY_PATH", str(secret_file))
    clean_secret_env.setenv("JWT_SECRET_KEY", PROD_SECRET)

    assert load_jwt_secret(testing=False) == PROD_SECRET


def test_unreadable_secret_file_raises(clean_secret_env, tmp_path):
    """Test that a missing secret file is reported clearly."""
    clean_secret_env.setenv("JWT_SECRET_KEY_PATH", str(tmp_path / "absent"))

    with pytest.raises(RuntimeError, match="Unable to read JWT secret file"):
        load_jwt_secret(testing=False)


def test_short_secret_raises(clean_secret_env):
    """Test that a secret shorter than 32 bytes is refused."""
    clean_secret_env.setenv("JWT_SECRET_KEY", "too-short")

    with pytest.raises(RuntimeError, match="at least 32 bytes"):
        load_jwt_secret(testing=False)


def test_testing_prefers_test_secret(clean_secret_env):
    """Test that testing mode uses TEST_JWT_SECRET_KEY when it is set."""
    clean_secret_env.setenv("JWT_SECRET_KEY", PROD_SECRET)
    clean_secret_env.setenv("TEST_JWT_SECRET_KEY", TEST_JWT_SECRET)

    assert load_jwt_secret(testing=True) == TEST_JWT_SECRET
    assert load_jwt_secret(testing=False) == PROD_SECRET


def test_testing_falls_back_to_standard_secret(clean_secret_env):
    """Test that testing mode falls back to JWT_SECRET_KEY."""
    clean_secret_env.setenv("JWT_SECRET_KEY", PROD_SECRET)

    assert load_jwt_secret(testing=True) == PROD_SECRET


def test_create_app_fails_without_secret(clean_secret_env):
    """Test that the application factory refuses to start without a secret."""
    from todo_app import create_app

    with pytest.raises(RuntimeError):
        create_app("testing")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("development", DevelopmentConfig),
        ("testing", TestingConfig),
        ("production", ProductionConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config_resolves_names(name, expected):
    """Test that environment names map onto configuration classes."""
    assert get_config(name) is expected


def test_token_lifetime_defaults_to_one_hour():
    """Test the default token lifetime and work factor settings."""
    assert DevelopmentConfig.JWT_EXPIRY_HOURS == 1
    assert ProductionConfig.PASSWORD_HASH_METHOD.startswith("pbkdf2:sha256:")
    assert TestingConfig.TESTING is True


def test_default_sqlite_uri_lives_in_instance_folder(tmp_path):
    """Test that the fallback database file is placed in the given instance folder."""
    from todo_app import default_sqlite_uri

    assert default_sqlite_uri(str(tmp_path), "todo.db") == f"sqlite:///{tmp_path / 'todo.db'}"
    assert default_sqlite_uri(str(tmp_path), "t.db", "check_same_thread=False") == (
        f"sqlite:///{tmp_path / 't.db'}?check_same_thread=False"
    )


def test_app_database_defaults_to_flask_instance_path(app):
    """Test that an unset database URL resolves under Flask's instance path."""
    if TestingConfig.SQLALCHEMY_DATABASE_URI:
        pytest.skip("TEST_DATABASE_URL overrides the default database")

    assert app.config["SQLALCHEMY_DATABASE_URI"].startswith(f"sqlite:///{app.instance_path}")
    assert "test_todo.db" in app.config["SQLALCHEMY_DATABASE_URI"]
