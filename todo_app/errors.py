"""
Error taxonomy and JSON error responses.

Every expected failure is raised as a subclass of :class:`ApiError` carrying
its HTTP status code.  :func:`register_error_handlers` installs app-level
handlers that render all errors -- including Werkzeug's own 404/405 and
unexpected exceptions -- in one envelope::

    {"error": {"message": "...", "status": 401}}
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    """A required field is missing or malformed."""

    status_code = 400


class Unauthorized(ApiError):
    """Bad credentials, or a missing, invalid or expired token."""

    status_code = 401


class NotFound(ApiError):
    """The requested resource does not exist."""

    status_code = 404


class Conflict(ApiError):
    """A unique key is already taken."""

    status_code = 409


class StoreError(ApiError):
    """
    The persistence layer failed.

    The client only ever sees the generic message; the driver exception is
    chained on ``__cause__`` and logged server-side.
    """

    status_code = 500

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message)


def error_response(message: str, status_code: int) -> tuple[Response, int]:
    """Build the standard ``{"error": {"message", "status"}}`` response."""
    return jsonify({"error": {"message": message, "status": status_code}}), status_code


def register_error_handlers(app: Flask) -> None:
    """Install JSON error handlers on *app*."""

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError) -> tuple[Response, int]:
        if isinstance(error, StoreError):
            cause = error.__cause__ or error
            logger.error("Store failure: %s", cause, exc_info=cause)
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        # Routing redirects are HTTPExceptions too; let them through
        if error.code is None or error.code < 400:
            return error
        return error_response(error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception) -> tuple[Response, int]:
        logger.exception("Internal server error: %s", error)
        return error_response("Internal server error", 500)
