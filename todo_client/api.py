"""
HTTP wrapper around the task store REST API.

Centralises communication with the task store so that every call carries
the configured timeout, every success is unwrapped from the
``{"message", "data"}`` envelope, and every failure is reported as either
:class:`ServerRejected` or :class:`TransportFailure`.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from config import Config, get_config

from .errors import ServerRejected, TransportFailure

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Could not reach the task server. Make sure the server is running."
UNREADABLE_MESSAGE = "The task server sent an unreadable response."

TASK_FIELDS = ("id", "task", "completed")


def _response_error_message(response: requests.Response, default: str) -> str:
    """
    Extract an error message from a JSON API response if possible.

    Falls back to *default* when the body is not JSON or the ``error``
    field is missing or blank.
    """
    try:
        payload = response.json()
    except ValueError:
        return default
    if not isinstance(payload, dict):
        return default
    message = payload.get("error")
    if isinstance(message, str) and message.strip():
        return message
    return default


def _is_task_record(data: Any) -> bool:
    """Whether *data* looks like a canonical task record."""
    return (
        isinstance(data, dict)
        and all(field in data for field in TASK_FIELDS)
        and isinstance(data["task"], str)
        and isinstance(data["completed"], bool)
    )


class TaskApiClient:
    """
    Thin client for the ``/tasks`` endpoints.

    Args:
        base_url: Root of the API, e.g. ``"http://localhost:3000/api"``.
        timeout: Seconds to wait for each response.
        session: Object exposing ``request(method, url, **kwargs)``;
            defaults to a new :class:`requests.Session`.
    """

    def __init__(self, base_url: str, timeout: float = 5, session: Any | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_config(cls, config_class: type[Config] | None = None, **kwargs: Any) -> TaskApiClient:
        """Build a client from ``TASK_API_URL`` and ``TASK_API_TIMEOUT``."""
        config_class = config_class or get_config()
        return cls(config_class.TASK_API_URL, config_class.TASK_API_TIMEOUT, **kwargs)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """
        Send one request and return the decoded JSON body.

        Raises:
            TransportFailure: On connection errors, timeouts, or a success
                response whose body is not a JSON object.
            ServerRejected: When the server answers with a non-2xx status.
        """
        url = self._url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise TransportFailure(UNREACHABLE_MESSAGE) from exc

        if not 200 <= response.status_code < 300:
            message = _response_error_message(response, f"Request failed ({response.status_code})")
            logger.warning("%s %s rejected with %s: %s", method, url, response.status_code, message)
            raise ServerRejected(response.status_code, message)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("%s %s returned a non-JSON body", method, url)
            raise TransportFailure(UNREADABLE_MESSAGE) from exc
        if not isinstance(payload, dict):
            raise TransportFailure(UNREADABLE_MESSAGE)
        return payload

    def _request_data(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send one request and return the ``data`` member of the envelope."""
        payload = self._request(method, path, **kwargs)
        if "data" not in payload:
            raise TransportFailure(UNREADABLE_MESSAGE)
        return payload["data"]

    def _request_task(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Send one request whose ``data`` must be a single task record."""
        data = self._request_data(method, path, **kwargs)
        if not _is_task_record(data):
            logger.error("%s %s returned a malformed task: %r", method, path, data)
            raise TransportFailure(UNREADABLE_MESSAGE)
        return data

    def list_tasks(self) -> list[dict[str, Any]]:
        """Fetch every task, newest first."""
        data = self._request_data("GET", "/tasks")
        if not isinstance(data, list) or not all(_is_task_record(task) for task in data):
            logger.error("GET /tasks returned a malformed task list")
            raise TransportFailure(UNREADABLE_MESSAGE)
        return data

    def get_task(self, task_id: int) -> dict[str, Any]:
        """Fetch a single canonical task."""
        return self._request_task("GET", f"/tasks/{task_id}")

    def create_task(self, text: str) -> dict[str, Any]:
        """Create a task and return the canonical record."""
        return self._request_task("POST", "/tasks", json={"task": text})

    def update_task(self, task_id: int, **patch: Any) -> dict[str, Any]:
        """Send a partial update (``task`` and/or ``completed``)."""
        return self._request_task("PUT", f"/tasks/{task_id}", json=patch)

    def delete_task(self, task_id: int) -> int:
        """Delete a task and return the number of removed rows."""
        changes = self._request("DELETE", f"/tasks/{task_id}").get("changes", 0)
        if not isinstance(changes, int) or isinstance(changes, bool):
            raise TransportFailure(UNREADABLE_MESSAGE)
        return changes
