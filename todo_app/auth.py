"""
Authentication gate: signup, login and bearer-token checks.

:class:`AuthGate` turns the three credential operations into either a
result or one of the named errors from :mod:`todo_app.errors`:

    register      -- create an account (``ValidationError``, ``Conflict``)
    authenticate  -- prove identity, mint a token (``ValidationError``,
                     ``Unauthorized``)
    authorize     -- check a presented token (``Unauthorized``)

Login failures always carry the same message whether or not the email is
registered, and unknown emails still pay for one hash comparison so the
response time does not reveal it either.

The :func:`require_auth` decorator applies ``authorize`` to the request's
``Authorization`` header in front of a Flask view.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from functools import wraps
from typing import Any

import jwt as pyjwt
from flask import current_app, g, request
from werkzeug.security import check_password_hash, generate_password_hash

from .errors import Conflict, Unauthorized, ValidationError
from .jwt import create_token, decode_token
from .models import Account
from .stores import AccountStore

logger = logging.getLogger(__name__)

AUTH_GATE_KEY = "todo_auth_gate"
MAX_EMAIL_LENGTH = 255

CREDENTIALS_REQUIRED = "Email and password are required"
INVALID_CREDENTIALS = "Invalid email or password"
TOKEN_REQUIRED = "Authorization token is required"
INVALID_TOKEN = "Invalid or expired token"


def _require_credentials(email: Any, password: Any) -> None:
    """Raise ``ValidationError`` unless both values are non-empty strings."""
    for value in (email, password):
        if not isinstance(value, str) or not value:
            raise ValidationError(CREDENTIALS_REQUIRED)


class AuthGate:
    """
    Registration, login and token verification over an :class:`AccountStore`.

    Args:
        accounts: Store used for email lookup and account insert.
        secret: Process-wide JWT signing secret.
        expiry_hours: Lifetime of minted tokens.
        clock_skew_seconds: Leeway applied when checking ``exp``.
        hash_method: Werkzeug password hash method string.
    """

    def __init__(
        self,
        accounts: AccountStore,
        secret: str,
        expiry_hours: int = 1,
        clock_skew_seconds: int = 0,
        hash_method: str = "pbkdf2:sha256:600000",
    ) -> None:
        self.accounts = accounts
        self._secret = secret
        self.expiry_hours = expiry_hours
        self.clock_skew_seconds = clock_skew_seconds
        self.hash_method = hash_method
        # Compared against when the email is unknown
        self._dummy_hash = generate_password_hash(
            secrets.token_urlsafe(16), method=hash_method
        )

    def register(self, email: Any, password: Any) -> Account:
        """
        Create a new account.

        The pre-check gives the common duplicate case a clean answer; the
        unique constraint on ``account.email`` still decides concurrent
        signups, and the store maps its violation to ``Conflict`` as well.

        Raises:
            ValidationError: If either field is missing or the email is too long.
            Conflict: If the email is already registered.
            StoreError: If the database fails.
        """
        _require_credentials(email, password)
        if len(email) > MAX_EMAIL_LENGTH:
            raise ValidationError(f"Email must be {MAX_EMAIL_LENGTH} characters or less")

        if self.accounts.find_by_email(email) is not None:
            raise Conflict("Email already exists")

        account = Account(email=email)
        account.set_password(password, method=self.hash_method)
        account = self.accounts.add(account)
        logger.info("Registered account id=%s", account.id)
        return account

    def authenticate(self, email: Any, password: Any) -> tuple[Account, str]:
        """
        Check credentials and mint a bearer token.

        Returns:
            The matching account and a freshly signed token.

        Raises:
            ValidationError: If either field is missing.
            Unauthorized: If the email is unknown or the password is wrong.
            StoreError: If the database fails.
        """
        _require_credentials(email, password)

        account = self.accounts.find_by_email(email)
        if account is None:
            check_password_hash(self._dummy_hash, password)
            logger.info("Login rejected")
            raise Unauthorized(INVALID_CREDENTIALS)
        if not account.check_password(password):
            logger.info("Login rejected for account id=%s", account.id)
            raise Unauthorized(INVALID_CREDENTIALS)

        token = create_token(
            account_id=account.id,
            email=account.email,
            secret=self._secret,
            expiry_hours=self.expiry_hours,
        )
        logger.info("Login succeeded for account id=%s", account.id)
        return account, token

    def authorize(self, token: str | None) -> dict[str, Any]:
        """
        Verify a presented token and return its claims.

        Raises:
            Unauthorized: If the token is absent, malformed, signed with
                another secret, or expired.
        """
        if token is None or not token.strip():
            raise Unauthorized(TOKEN_REQUIRED)
        try:
            return decode_token(token.strip(), self._secret, leeway=self.clock_skew_seconds)
        except pyjwt.InvalidTokenError as exc:
            raise Unauthorized(INVALID_TOKEN) from exc


def get_auth_gate() -> AuthGate:
    """Return the gate bound to the current application."""
    return current_app.extensions[AUTH_GATE_KEY]


def extract_token() -> str | None:
    """
    Read the token from the current request's ``Authorization`` header.

    The header normally holds the raw token; a ``Bearer`` prefix is
    tolerated and stripped.
    """
    header = request.headers.get("Authorization", "").strip()
    if header[:7].lower() == "bearer ":
        header = header[7:].strip()
    return header or None


def require_auth(view_func: Callable[..., Any]):
    """
    Decorator that admits a request only with a valid token.

    On success the token's identity is exposed as ``g.account_id`` and
    ``g.email``; on failure ``Unauthorized`` propagates to the JSON error
    handler and the view never runs.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        claims = get_auth_gate().authorize(extract_token())
        g.account_id = claims["id"]
        g.email = claims["email"]
        return view_func(*args, **kwargs)

    return wrapper
