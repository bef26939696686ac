"""
Account endpoints.

Endpoints:
    POST /user/signup  -- Create an account.
    POST /user/login   -- Authenticate and receive a token.
    POST /user/signin  -- Same as /login.
    POST /user/logout  -- Acknowledge logout for a token holder.

Request bodies wrap the credentials as ``{"user": {"email", "password"}}``.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, request

from ..auth import get_auth_gate, require_auth

users_bp = Blueprint("users", __name__)


def _credentials_from_body() -> tuple[Any, Any]:
    """Pull ``email`` and ``password`` out of the ``user`` object, if any."""
    data = request.get_json(silent=True)
    user = data.get("user") if isinstance(data, dict) else None
    if not isinstance(user, dict):
        return None, None
    return user.get("email"), user.get("password")


def _login() -> tuple[Response, int]:
    email, password = _credentials_from_body()
    account, token = get_auth_gate().authenticate(email, password)
    return jsonify({"id": account.id, "email": account.email, "token": token}), 200


@users_bp.route("/signup", methods=["POST"])
def signup() -> tuple[Response, int]:
    """
    Register a new account.

    Returns:
        201 with ``id`` and ``email`` on success.
        400 if email or password is missing.
        409 if the email is already registered.
    """
    email, password = _credentials_from_body()
    account = get_auth_gate().register(email, password)
    return jsonify(account.to_dict()), 201


@users_bp.route("/login", methods=["POST"])
def login() -> tuple[Response, int]:
    """
    Authenticate and issue a token.

    Returns:
        200 with ``id``, ``email`` and ``token`` on success.
        400 if email or password is missing.
        401 with one generic message for unknown email or wrong password.
    """
    return _login()


@users_bp.route("/signin", methods=["POST"])
def signin() -> tuple[Response, int]:
    """Alias of :func:`login` with identical responses."""
    return _login()


@users_bp.route("/logout", methods=["POST"])
@require_auth
def logout() -> tuple[Response, int]:
    """
    Acknowledge a logout.

    Tokens are not tracked server-side, so the token stays valid until it
    expires; the client is expected to discard it.
    """
    return jsonify({"message": "Logged out successfully"}), 200
