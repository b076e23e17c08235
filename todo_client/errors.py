"""
Client-side failure kinds.

The controller needs to tell the user whether the server refused the
request or could not be reached at all, so the API wrapper raises one of
two exception types and never lets raw :mod:`requests` errors escape.
"""

from __future__ import annotations


class TaskClientError(Exception):
    """Base class for failures seen by the task list client."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ServerRejected(TaskClientError):
    """
    The task store answered with an error status.

    Attributes:
        status_code: HTTP status returned by the store.
        message: The store's ``error`` text, or a generic fallback.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        """True when the referenced task no longer exists on the server."""
        return self.status_code == 404

    @property
    def is_invalid_input(self) -> bool:
        """True when the server rejected the submitted data."""
        return self.status_code == 400


class TransportFailure(TaskClientError):
    """The request never produced a usable answer (network, timeout, bad body)."""
