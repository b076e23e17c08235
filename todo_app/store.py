"""
Task store: the single writer and source of truth for tasks.

The store owns every rule about task state -- trimming and validating
text, assigning ids and timestamps, ordering listings -- so that the HTTP
layer stays a thin translation between JSON and store calls.

Each public method is one unit of work: it either commits and returns the
canonical record, or rolls back and raises a :class:`TaskStoreError`.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todo_app.errors import InvalidInput, NotFound, StorageFault
from todo_app.models import Task, ensure_utc, utc_now

logger = logging.getLogger(__name__)

EMPTY_TASK_MESSAGE = "Task cannot be empty"

# Largest value a SQLite INTEGER primary key can hold
MAX_TASK_ID = 2**63 - 1


class _Unset:
    """Marker for patch fields the caller did not provide."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def clean_task_text(value: Any) -> str:
    """
    Trim task text and reject empty or non-string values.

    Args:
        value: Raw text supplied by the client.

    Returns:
        The text with surrounding whitespace removed.

    Raises:
        InvalidInput: If the value is not a string or is blank once trimmed.
    """
    if not isinstance(value, str):
        raise InvalidInput(EMPTY_TASK_MESSAGE if value is None else "Task must be a string")
    text = value.strip()
    if not text:
        raise InvalidInput(EMPTY_TASK_MESSAGE)
    return text


def clean_completed_flag(value: Any) -> bool:
    """
    Validate a completion flag.

    JSON booleans are accepted as-is; the integers 0 and 1 are accepted as
    the legacy column encoding.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise InvalidInput("Completed must be a boolean")


class TaskStore:
    """CRUD operations over the ``todos`` table."""

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _unit_of_work(self, action: str) -> Iterator[None]:
        """Roll back and re-raise database errors as :class:`StorageFault`."""
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(f"Storage fault while trying to {action}: {exc}")
            raise StorageFault(f"Could not {action}") from exc

    @staticmethod
    def _check_id(task_id: int) -> None:
        if not 1 <= task_id <= MAX_TASK_ID:
            logger.warning(f"Task {task_id} not found")
            raise NotFound(task_id)

    def _get_or_raise(self, task_id: int) -> Task:
        self._check_id(task_id)
        task = self.session.get(Task, task_id)
        if task is None:
            logger.warning(f"Task {task_id} not found")
            raise NotFound(task_id)
        return task

    def list_tasks(self) -> list[Task]:
        """Return every task, newest first; ties fall back to insertion order."""
        stmt = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
        with self._unit_of_work("list tasks"):
            tasks = list(self.session.scalars(stmt).all())
        logger.info(f"Found {len(tasks)} tasks")
        return tasks

    def get_task(self, task_id: int) -> Task:
        """Return a single task or raise :class:`NotFound`."""
        with self._unit_of_work("load task"):
            return self._get_or_raise(task_id)

    def create_task(self, text: Any) -> Task:
        """
        Create a task from client-supplied text.

        Args:
            text: Task text; surrounding whitespace is removed.

        Returns:
            The persisted task with id and timestamps assigned.

        Raises:
            InvalidInput: If the trimmed text is empty.
            StorageFault: If the insert fails.
        """
        cleaned = clean_task_text(text)
        now = utc_now()
        task = Task(task=cleaned, completed=False, created_at=now, updated_at=now)

        with self._unit_of_work("create task"):
            self.session.add(task)
            self.session.commit()

        logger.info(f"Created task with ID: {task.id}")
        return task

    def update_task(self, task_id: int, task: Any = UNSET, completed: Any = UNSET) -> Task:
        """
        Apply a partial update to an existing task.

        Only the provided fields change. A call providing neither field still
        refreshes ``updated_at``.

        Raises:
            NotFound: If no task has this id.
            InvalidInput: If provided text is blank or the flag is not boolean.
            StorageFault: If the update fails.
        """
        with self._unit_of_work("update task"):
            record = self._get_or_raise(task_id)

        changes: dict[str, Any] = {}
        if task is not UNSET:
            changes["task"] = clean_task_text(task)
        if completed is not UNSET:
            changes["completed"] = clean_completed_flag(completed)

        with self._unit_of_work("update task"):
            for field, value in changes.items():
                setattr(record, field, value)
            # updated_at never goes behind created_at, even if the clock does
            record.updated_at = max(utc_now(), ensure_utc(record.created_at))
            self.session.commit()

        logger.info(f"Updated task {task_id} fields={sorted(changes) or ['updated_at']}")
        return record

    def delete_task(self, task_id: int) -> int:
        """
        Delete a task.

        Returns:
            The number of removed rows.

        Raises:
            NotFound: If no row was removed.
        """
        self._check_id(task_id)
        with self._unit_of_work("delete task"):
            result = self.session.execute(delete(Task).where(Task.id == task_id))
            changes = result.rowcount
            if changes == 0:
                self.session.rollback()
            else:
                self.session.commit()

        if changes == 0:
            logger.warning(f"Task {task_id} not found")
            raise NotFound(task_id)

        logger.info(f"Deleted task {task_id}")
        return changes

    def count_tasks(self) -> dict[str, int]:
        """Return ``total``, ``completed`` and ``pending`` counts."""
        with self._unit_of_work("count tasks"):
            total = self.session.scalar(select(func.count()).select_from(Task)) or 0
            completed = self.session.scalar(
                select(func.count()).select_from(Task).where(Task.completed.is_(True))
            ) or 0
        return {"total": total, "completed": completed, "pending": total - completed}
