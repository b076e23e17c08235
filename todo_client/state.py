"""
Client-side state for the task list.

Holds the local mirror of the task store plus the UI-facing state the
renderer needs. Nothing here talks to the network; the controller is the
only code that mutates a :class:`ClientState`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FilterMode(str, Enum):
    """Which tasks the list view shows."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"


EMPTY_MESSAGES = {
    FilterMode.ALL: "No tasks yet. Add one above to get started!",
    FilterMode.COMPLETED: "No completed tasks yet.",
    FilterMode.PENDING: "No pending tasks. Great job!",
}


class NotificationKind(str, Enum):
    """Severity of a transient notification."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A transient message shown to the user after an operation."""

    message: str
    kind: NotificationKind = NotificationKind.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.kind is NotificationKind.ERROR


@dataclass(frozen=True)
class TaskStats:
    """Aggregate counts over the whole local cache."""

    total: int = 0
    completed: int = 0
    pending: int = 0

    @classmethod
    def from_tasks(cls, tasks: list[dict[str, Any]]) -> TaskStats:
        total = len(tasks)
        completed = sum(1 for task in tasks if task.get("completed"))
        return cls(total=total, completed=completed, pending=total - completed)


@dataclass
class ClientState:
    """
    Everything the task list client remembers between operations.

    Attributes:
        tasks: Canonical task records in server order (newest first).
        current_filter: Active list filter.
        editing_task_id: Id of the task whose edit form is open, if any.
        edit_text: Text currently in the edit form.
        notification: Result of the most recent operation, if any.
    """

    tasks: list[dict[str, Any]] = field(default_factory=list)
    current_filter: FilterMode = FilterMode.ALL
    editing_task_id: int | None = None
    edit_text: str = ""
    notification: Notification | None = None

    def find(self, task_id: int) -> dict[str, Any] | None:
        """Return the cached record with this id, or None."""
        for task in self.tasks:
            if task.get("id") == task_id:
                return task
        return None

    def filtered_tasks(self) -> list[dict[str, Any]]:
        """Return the cached tasks that pass the current filter."""
        if self.current_filter is FilterMode.COMPLETED:
            return [task for task in self.tasks if task.get("completed")]
        if self.current_filter is FilterMode.PENDING:
            return [task for task in self.tasks if not task.get("completed")]
        return list(self.tasks)


@dataclass(frozen=True)
class TaskListView:
    """Derived, read-only snapshot handed to the renderer."""

    tasks: list[dict[str, Any]]
    stats: TaskStats
    current_filter: FilterMode
    empty_message: str
    editing_task_id: int | None = None
    edit_text: str = ""
    notification: Notification | None = None
