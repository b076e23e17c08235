"""
Database models for the task list.

This module defines the SQLAlchemy model backing the task store. The
``todos`` table is created on startup by ``db.create_all()``.
"""

from datetime import datetime, timezone
from typing import Any

from todo_app import db


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Normalize datetimes to timezone-aware UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Task(db.Model):
    """
    Task model representing a single to-do entry.

    Attributes:
        id: Store-assigned identifier, never reused after deletion.
        task: Trimmed, non-empty task text.
        completed: Whether the task is done.
        created_at: Timestamp when the task was created.
        updated_at: Timestamp of the last successful mutation.
    """

    __tablename__ = "todos"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted last row
    __table_args__ = {"sqlite_autoincrement": True}

    id: int = db.Column(db.Integer, primary_key=True)
    task: str = db.Column(db.Text, nullable=False)
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utc_now
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utc_now
    )

    @staticmethod
    def _to_utc_iso(value: datetime | None) -> str | None:
        """
        Convert datetime to an ISO-8601 UTC string.

        SQLite returns naive datetime values even when timezone-aware
        columns are declared, so values are normalized before formatting.
        """
        if value is None:
            return None
        return ensure_utc(value).isoformat()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to its canonical JSON representation.

        Returns:
            Dictionary containing all task fields.
        """
        return {
            "id": self.id,
            "task": self.task,
            "completed": bool(self.completed),
            "created_at": self._to_utc_iso(self.created_at),
            "updated_at": self._to_utc_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.task}>"
