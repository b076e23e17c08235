"""
Task list controller.

Keeps a local mirror of the task store and the derived state needed to
render it. The store is the authority for every mutation: local records are
only ever changed by copying fields out of a successful response, and a
failed call leaves the cache exactly as it was.

Every store-contacting operation returns ``True`` on success and ``False``
otherwise; the outcome is also recorded as a :class:`Notification` on the
state so the UI can show it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .api import TaskApiClient
from .errors import ServerRejected, TaskClientError, TransportFailure
from .state import (
    EMPTY_MESSAGES,
    ClientState,
    FilterMode,
    Notification,
    NotificationKind,
    TaskListView,
    TaskStats,
)

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


def confirmation_prompt(task: dict) -> str:
    """Question put to the user before a task is deleted."""
    return f'Are you sure you want to delete "{task.get("task", "")}"?'


class TaskListController:
    """
    Owns a :class:`ClientState` and synchronises it with the task store.

    Args:
        api: Client for the task store REST API.
        state: Initial state; a fresh empty state when omitted.
    """

    def __init__(self, api: TaskApiClient, state: ClientState | None = None):
        self.api = api
        self.state = state if state is not None else ClientState()

    # -----------------------------------------------------------------
    # Notifications
    # -----------------------------------------------------------------

    def _notify(self, message: str, kind: NotificationKind = NotificationKind.SUCCESS) -> None:
        self.state.notification = Notification(message, kind)

    def _reject_locally(self, message: str) -> bool:
        self._notify(message, NotificationKind.ERROR)
        return False

    def _fail(self, action: str, error: TaskClientError) -> bool:
        """Record a failed store call, telling rejection apart from unreachability."""
        if isinstance(error, TransportFailure):
            message = f"Failed to {action}. {error.message}"
        else:
            message = f"Failed to {action}: the server rejected the request ({error.message})"
        logger.warning("Could not %s: %s", action, error.message)
        self._notify(message, NotificationKind.ERROR)
        return False

    def _drop_if_gone(self, task_id: int, error: TaskClientError) -> None:
        """Forget a cached task the server reports as deleted."""
        if isinstance(error, ServerRejected) and error.is_not_found:
            self.state.tasks = [task for task in self.state.tasks if task.get("id") != task_id]
            if self.state.editing_task_id == task_id:
                self.cancel_edit()

    # -----------------------------------------------------------------
    # Store-contacting operations
    # -----------------------------------------------------------------

    def refresh(self) -> bool:
        """Replace the local cache with the store's full list."""
        try:
            tasks = self.api.list_tasks()
        except TaskClientError as error:
            return self._fail("load tasks", error)

        self.state.tasks = [dict(task) for task in tasks]
        logger.info("Loaded %d tasks", len(self.state.tasks))
        return True

    def submit_new_task(self, text: str) -> bool:
        """Create a task and put the canonical record at the top of the list."""
        cleaned = (text or "").strip()
        if not cleaned:
            return self._reject_locally("Please enter a task")

        try:
            created = self.api.create_task(cleaned)
        except TaskClientError as error:
            return self._fail("add task", error)

        self.state.tasks.insert(0, dict(created))
        self._notify("Task added successfully!")
        return True

    def set_completed(self, task_id: int, value: bool) -> bool:
        """Set a task's completion flag to whatever the store echoes back."""
        local = self.state.find(task_id)
        if local is None:
            return self._reject_locally("Task not found")

        try:
            updated = self.api.update_task(task_id, completed=bool(value))
        except TaskClientError as error:
            self._drop_if_gone(task_id, error)
            return self._fail("update task", error)

        local["completed"] = updated["completed"]
        self._notify("Task completed!" if local["completed"] else "Task marked as pending")
        return True

    def toggle_completed(self, task_id: int) -> bool:
        """Flip the completion flag of a cached task."""
        local = self.state.find(task_id)
        if local is None:
            return self._reject_locally("Task not found")
        return self.set_completed(task_id, not local.get("completed"))

    def begin_edit(self, task_id: int) -> bool:
        """Open the edit form for a cached task."""
        local = self.state.find(task_id)
        if local is None:
            return False
        self.state.editing_task_id = task_id
        self.state.edit_text = local.get("task", "")
        return True

    def cancel_edit(self) -> None:
        """Close the edit form without saving."""
        self.state.editing_task_id = None
        self.state.edit_text = ""

    def edit_task(self, task_id: int, new_text: str) -> bool:
        """
        Change a task's text.

        The edit form stays open with the submitted text on any failure so
        the user can retry; it closes once the store accepts the change.
        """
        self.state.editing_task_id = task_id
        self.state.edit_text = new_text or ""

        cleaned = (new_text or "").strip()
        if not cleaned:
            return self._reject_locally("Task cannot be empty")

        local = self.state.find(task_id)
        if local is None:
            return self._reject_locally("Task not found")

        try:
            updated = self.api.update_task(task_id, task=cleaned)
        except TaskClientError as error:
            self._drop_if_gone(task_id, error)
            return self._fail("update task", error)

        local["task"] = updated["task"]
        self.cancel_edit()
        self._notify("Task updated successfully!")
        return True

    def save_edit(self) -> bool:
        """Submit the open edit form."""
        if self.state.editing_task_id is None:
            return False
        return self.edit_task(self.state.editing_task_id, self.state.edit_text)

    def remove_task(self, task_id: int, confirm: Confirm) -> bool:
        """
        Delete a task after the user confirms.

        Args:
            task_id: Task to delete.
            confirm: Called with the confirmation question; the request is
                only sent when it returns True.
        """
        local = self.state.find(task_id)
        if local is None:
            return self._reject_locally("Task not found")

        if not confirm(confirmation_prompt(local)):
            logger.info("Deletion of task %s cancelled", task_id)
            return False

        try:
            self.api.delete_task(task_id)
        except TaskClientError as error:
            self._drop_if_gone(task_id, error)
            return self._fail("delete task", error)

        self.state.tasks = [task for task in self.state.tasks if task.get("id") != task_id]
        if self.state.editing_task_id == task_id:
            self.cancel_edit()
        self._notify("Task deleted successfully!")
        return True

    # -----------------------------------------------------------------
    # Local-only operations
    # -----------------------------------------------------------------

    def set_filter(self, mode: FilterMode | str) -> None:
        """Choose which tasks the next view shows; never contacts the store."""
        self.state.current_filter = FilterMode(mode)

    def dismiss_notification(self) -> None:
        self.state.notification = None

    def stats(self) -> TaskStats:
        """Counts over the full cache, regardless of the active filter."""
        return TaskStats.from_tasks(self.state.tasks)

    def view(self) -> TaskListView:
        """Derive the snapshot the renderer consumes."""
        return TaskListView(
            tasks=self.state.filtered_tasks(),
            stats=self.stats(),
            current_filter=self.state.current_filter,
            empty_message=EMPTY_MESSAGES[self.state.current_filter],
            editing_task_id=self.state.editing_task_id,
            edit_text=self.state.edit_text,
            notification=self.state.notification,
        )
