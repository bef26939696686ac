"""Token and header helpers shared by the test suites."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

TEST_JWT_SECRET = "test-jwt-secret-key-for-local-tests-123456"
OTHER_JWT_SECRET = "another-secret-that-the-app-does-not-trust-0987"

DEFAULT_TEST_ACCOUNT_ID = 1
DEFAULT_TEST_EMAIL = "test_user@example.com"


def create_test_token(
    account_id: int = DEFAULT_TEST_ACCOUNT_ID,
    email: str = DEFAULT_TEST_EMAIL,
    secret: str = TEST_JWT_SECRET,
    expired: bool = False,
) -> str:
    """Create a signed HS256 test token with the required claims."""
    now = datetime.now(timezone.utc)
    expiry_time = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload: dict[str, Any] = {
        "id": int(account_id),
        "email": str(email),
        "iat": int(now.timestamp()),
        "exp": int(expiry_time.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(token: str) -> dict[str, str]:
    """Build JSON API headers carrying the raw token in ``Authorization``."""
    return {
        "Authorization": token,
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def signup_body(email: str, password: str) -> dict[str, dict[str, str]]:
    """Wrap credentials the way the user endpoints expect them."""
    return {"user": {"email": email, "password": password}}
