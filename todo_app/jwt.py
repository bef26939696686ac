"""
JWT token creation and verification.

Tokens are HS256-signed with the process-wide secret and carry:

    - ``id``    -- integer primary key of the authenticated account.
    - ``email`` -- the account's email address.
    - ``iat``   -- issued-at timestamp (UTC epoch seconds).
    - ``exp``   -- expiration timestamp (UTC epoch seconds).

Nothing about a token is stored server-side, so a token stays valid until
``exp`` regardless of logout.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

ALGORITHM = "HS256"
REQUIRED_TOKEN_CLAIMS = ["id", "email", "iat", "exp"]


def create_token(
    account_id: int,
    email: str,
    secret: str,
    expiry_hours: int,
) -> str:
    """
    Create an HS256-signed JWT for an authenticated account.

    Args:
        account_id: Primary key of the account.  Must be a positive integer.
        email: Email address of the account.  Must be a non-empty string.
        secret: The shared signing secret.
        expiry_hours: Number of hours from *now* until the token expires.

    Returns:
        A compact JWS string (``header.payload.signature``).

    Raises:
        ValueError: If *account_id* is not positive or *email* is blank.
    """
    if int(account_id) <= 0:
        raise ValueError("account_id must be a positive integer")
    if not isinstance(email, str) or not email.strip():
        raise ValueError("email must be a non-empty string")

    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(hours=int(expiry_hours))

    payload: dict[str, Any] = {
        "id": int(account_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str, leeway: int = 0) -> dict[str, Any]:
    """
    Decode and validate a JWT issued by :func:`create_token`.

    Verifies the signature with *secret* (HS256 only, so ``none`` and
    asymmetric algorithms are refused), checks expiry, requires every claim
    in ``REQUIRED_TOKEN_CLAIMS`` and validates the identity claims.

    Args:
        token: The compact JWS string.
        secret: The shared signing secret.
        leeway: Seconds of tolerance applied to ``exp``.

    Returns:
        The decoded payload.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, expired, signed
            with another key or algorithm, or carries bad claims.
    """
    payload = jwt.decode(
        token,
        secret,
        algorithms=[ALGORITHM],
        options={"require": REQUIRED_TOKEN_CLAIMS},
        leeway=leeway,
    )
    account_id = payload.get("id")
    email = payload.get("email")
    # bool is an int subclass; a ``true`` id claim is not an identity
    if isinstance(account_id, bool) or not isinstance(account_id, int) or account_id <= 0:
        raise jwt.InvalidTokenError("Invalid id claim")
    if not isinstance(email, str) or not email.strip():
        raise jwt.InvalidTokenError("Invalid email claim")
    return payload
