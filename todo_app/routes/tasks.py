"""
Task endpoints and health check.

Endpoints:
    GET    /health       - Health check
    GET    /             - List all tasks
    POST   /create       - Create a task (token required)
    DELETE /delete/<id>  - Delete a task
"""

from __future__ import annotations

import logging
import os

from flask import Blueprint, Response, current_app, g, jsonify, request

from ..auth import require_auth
from ..errors import NotFound, ValidationError
from ..stores import TaskStore

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__)

TASK_STORE_KEY = "todo_task_store"
MAX_DESCRIPTION_LENGTH = 255


def get_task_store() -> TaskStore:
    """Return the task store bound to the current application."""
    return current_app.extensions[TASK_STORE_KEY]


def validate_task_data(data: object) -> str:
    """
    Return the trimmed description from a ``{"task": {...}}`` body.

    Raises:
        ValidationError: If the description is missing, blank or too long.
    """
    task = data.get("task") if isinstance(data, dict) else None
    description = task.get("description") if isinstance(task, dict) else None
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("Task description is required")
    description = description.strip()
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Task description must be {MAX_DESCRIPTION_LENGTH} characters or less"
        )
    return description


@tasks_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Return service health status."""
    return jsonify(
        {
            "status": "healthy",
            "service": "todo",
            "environment": os.getenv("ENVIRONMENT", "unknown"),
        }
    ), 200


@tasks_bp.route("/", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """List every task as a JSON array."""
    tasks = get_task_store().list_all()
    return jsonify([task.to_dict() for task in tasks]), 200


@tasks_bp.route("/create", methods=["POST"])
@require_auth
def create_task() -> tuple[Response, int]:
    """
    Create a task.

    Expects ``{"task": {"description": "..."}}``.

    Returns:
        201 with the new task, 400 if the description is missing, 401
        without a valid token.
    """
    description = validate_task_data(request.get_json(silent=True))
    task = get_task_store().create(description)
    logger.info("Task %s created by account id=%s", task.id, g.account_id)
    return jsonify(task.to_dict()), 201


@tasks_bp.route("/delete/<int:task_id>", methods=["DELETE"])
def delete_task(task_id: int) -> tuple[Response, int]:
    """
    Delete a task by ID.

    Returns:
        200 with the deleted ``id``, or 404 if no such task exists.
    """
    if not get_task_store().delete(task_id):
        raise NotFound("Task not found")
    logger.info("Task %s deleted", task_id)
    return jsonify({"id": task_id}), 200
