"""
REST API endpoints for task management.

This module translates HTTP requests into task store calls. All endpoints
return JSON; successful responses wrap the canonical record(s) in
``{"message": ..., "data": ...}`` and failures answer ``{"error": ...}``.

Endpoints:
    GET    /api/health          - Health check
    GET    /api/tasks           - List all tasks, newest first
    GET    /api/tasks/stats     - Total/completed/pending counts
    GET    /api/tasks/<id>      - Get a single task by ID
    POST   /api/tasks           - Create a new task
    PUT    /api/tasks/<id>      - Update task text and/or completion flag
    DELETE /api/tasks/<id>      - Delete a task
"""

import logging
import os
from typing import Any

from flask import Blueprint, jsonify, request, Response
from werkzeug.exceptions import HTTPException

from todo_app import db
from todo_app.errors import InvalidInput, TaskStoreError
from todo_app.store import TaskStore

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

PATCHABLE_FIELDS = ("task", "completed")


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def get_store() -> TaskStore:
    """Return a task store bound to the request-scoped database session."""
    return TaskStore(db.session)


def get_json_object() -> dict[str, Any]:
    """
    Read the request body as a JSON object.

    Raises:
        InvalidInput: If the body is missing, malformed, or not an object.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be JSON")
    return data


def success(data: Any, status_code: int = 200) -> tuple[Response, int]:
    """Wrap canonical data in the standard success envelope."""
    return jsonify({"message": "success", "data": data}), status_code


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify({
        "status": "healthy",
        "service": "tasks",
        "environment": os.getenv("ENVIRONMENT", "unknown"),
        "version": os.getenv("APP_VERSION", "unknown")
    }), 200


@api_bp.route("/tasks", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """
    List all tasks, newest first.

    Returns:
        JSON response with the list of tasks and 200 status code.
    """
    logger.info("GET /api/tasks - Fetching all tasks")
    tasks = get_store().list_tasks()
    return success([task.to_dict() for task in tasks])


@api_bp.route("/tasks/stats", methods=["GET"])
def get_task_stats() -> tuple[Response, int]:
    """Return total, completed and pending task counts."""
    logger.info("GET /api/tasks/stats - Counting tasks")
    return success(get_store().count_tasks())


@api_bp.route("/tasks/<int:task_id>", methods=["GET"])
def get_task(task_id: int) -> tuple[Response, int]:
    """
    Get a single task by ID.

    Args:
        task_id: The unique identifier of the task.

    Returns:
        JSON response with task data and 200 status code,
        or error message and 404 if not found.
    """
    logger.info(f"GET /api/tasks/{task_id} - Fetching task")
    task = get_store().get_task(task_id)
    return success(task.to_dict())


@api_bp.route("/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task.

    Request Body (JSON):
        task: Task text (required, trimmed, must not be blank)

    Returns:
        JSON response with the created task and 201 status code,
        or error message and 400 if validation fails.
    """
    logger.info("POST /api/tasks - Creating new task")
    data = get_json_object()
    task = get_store().create_task(data.get("task"))
    return success(task.to_dict(), 201)


@api_bp.route("/tasks/<int:task_id>", methods=["PUT"])
def update_task(task_id: int) -> tuple[Response, int]:
    """
    Update an existing task.

    Args:
        task_id: The unique identifier of the task.

    Request Body (JSON):
        task: New task text (optional)
        completed: New completion flag (optional)

    Returns:
        JSON response with the updated task and 200 status code,
        or error message and 404/400 if not found or validation fails.
    """
    logger.info(f"PUT /api/tasks/{task_id} - Updating task")
    data = get_json_object()
    patch = {field: data[field] for field in PATCHABLE_FIELDS if field in data}
    task = get_store().update_task(task_id, **patch)
    return success(task.to_dict())


@api_bp.route("/tasks/<int:task_id>", methods=["DELETE"])
def delete_task(task_id: int) -> tuple[Response, int]:
    """
    Delete a task.

    Args:
        task_id: The unique identifier of the task.

    Returns:
        JSON response with the number of removed rows and 200 status code,
        or error message and 404 if not found.
    """
    logger.info(f"DELETE /api/tasks/{task_id} - Deleting task")
    changes = get_store().delete_task(task_id)
    return jsonify({"message": "deleted", "changes": changes}), 200


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.errorhandler(TaskStoreError)
def task_store_error(error: TaskStoreError) -> tuple[Response, int]:
    """Translate store failures into JSON error responses."""
    if error.status_code >= 500:
        logger.error(f"Task store failure: {error.message}")
    else:
        logger.warning(f"Request rejected: {error.message}")
    return jsonify({"error": error.message}), error.status_code


@api_bp.app_errorhandler(HTTPException)
def http_error(error: HTTPException) -> tuple[Response, int]:
    """Answer routing errors (404, 405, ...) with JSON instead of HTML."""
    return jsonify({"error": error.description}), error.code


@api_bp.app_errorhandler(500)
def internal_error(error: Exception) -> tuple[Response, int]:
    """Handle 500 Internal Server errors."""
    logger.error(f"Internal server error: {error}")
    return jsonify({"error": "Internal server error"}), 500
