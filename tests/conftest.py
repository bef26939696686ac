"""
Shared pytest fixtures for the todo API test suite.

Provides the Flask application, test client, per-test database lifecycle,
account and task factories, and ready-made token headers.

Key Concepts Demonstrated:
- Fixture scopes (session for the app, function for data)
- Factory fixtures for test-data creation
- Database setup/teardown for isolation between tests
"""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
from faker import Faker

from tests.helpers import TEST_JWT_SECRET, auth_headers, create_test_token

# Set testing environment before importing the app
os.environ["FLASK_ENV"] = "testing"
os.environ["TEST_JWT_SECRET_KEY"] = TEST_JWT_SECRET

from todo_app import create_app, db
from todo_app.auth import AUTH_GATE_KEY, AuthGate
from todo_app.models import Account, Task

fake = Faker()


@pytest.fixture(scope="session")
def app():
    """
    Provide the Flask application instance for the entire test session.

    The same app is reused by every test; data isolation comes from the
    ``db_session`` fixture.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a Flask test client scoped to a single test function."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Provide a clean database for each test function.

    Creates all tables before the test, then rolls back any uncommitted
    changes and drops all tables afterward.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def gate(app, db_session) -> AuthGate:
    """Provide the authentication gate wired into the test app."""
    return app.extensions[AUTH_GATE_KEY]


@pytest.fixture
def account_factory(app, db_session) -> Callable[..., Account]:
    """
    Provide a factory that creates and persists Account rows.

    Passwords are hashed with the app's configured (cheap, in testing)
    hash method.
    """

    def _create_account(
        email: str = "testuser@example.com",
        password: str = "StrongPass123!",
    ) -> Account:
        account = Account(email=email)
        account.set_password(password, method=app.config["PASSWORD_HASH_METHOD"])
        db_session.session.add(account)
        db_session.session.commit()
        return account

    return _create_account


@pytest.fixture
def task_factory(db_session) -> Callable[..., Task]:
    """Provide a factory that creates Task rows with Faker descriptions."""

    def _create_task(description: str | None = None) -> Task:
        task = Task(description=description or fake.sentence(nb_words=4))
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def auth_token() -> str:
    """A valid token for account id 1, signed with the test secret."""
    return create_test_token()


@pytest.fixture
def api_headers(auth_token) -> dict[str, str]:
    """JSON headers carrying ``auth_token`` as the raw Authorization value."""
    return auth_headers(auth_token)
