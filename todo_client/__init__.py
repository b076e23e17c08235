"""
Task list client.

Keeps a local, filterable mirror of the task store and renders it. The
pieces are:

* :class:`TaskApiClient` -- HTTP calls to the task store REST API.
* :class:`TaskListController` -- owns the :class:`ClientState` and
  reconciles it from every store response.
* :func:`render_task_list` -- pure HTML rendering of the derived view.
"""

from __future__ import annotations

from .api import TaskApiClient
from .controller import TaskListController, confirmation_prompt
from .errors import ServerRejected, TaskClientError, TransportFailure
from .render import render_task_list
from .state import ClientState, FilterMode, Notification, NotificationKind, TaskListView, TaskStats

__all__ = [
    "ClientState",
    "FilterMode",
    "Notification",
    "NotificationKind",
    "ServerRejected",
    "TaskApiClient",
    "TaskClientError",
    "TaskListController",
    "TaskListView",
    "TaskStats",
    "TransportFailure",
    "confirmation_prompt",
    "render_task_list",
]
