"""
Error taxonomy for the task store.

Every store operation either returns a canonical record or raises one of
these exceptions. Each carries the HTTP status the API layer answers with,
so the blueprint error handler can translate them without a lookup table.
"""


class TaskStoreError(Exception):
    """Base class for failures reported by the task store."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(TaskStoreError):
    """Client-supplied data failed validation; nothing was mutated."""

    status_code = 400


class NotFound(TaskStoreError):
    """The referenced task id does not exist."""

    status_code = 404

    def __init__(self, task_id: int):
        super().__init__("Task not found")
        self.task_id = task_id


class StorageFault(TaskStoreError):
    """The underlying database failed; the unit of work was rolled back."""

    status_code = 500
