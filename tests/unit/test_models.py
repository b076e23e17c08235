"""
Unit tests for Task model logic.
"""

from datetime import datetime, timedelta, timezone

import pytest

from todo_app.models import Task, ensure_utc


pytestmark = pytest.mark.unit


def test_task_defaults_and_to_dict(db_session):
    task = Task(task="Test Task")
    db_session.session.add(task)
    db_session.session.commit()

    data = task.to_dict()

    assert data["task"] == "Test Task"
    assert data["completed"] is False
    assert data["created_at"] is not None
    assert data["updated_at"] is not None


def test_to_dict_serializes_timestamps_as_utc(db_session):
    """Test that timestamps come back as timezone-aware UTC ISO strings."""
    # Arrange
    stamp = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    task = Task(task="Stamped", created_at=stamp, updated_at=stamp)
    db_session.session.add(task)
    db_session.session.commit()

    # Act
    data = task.to_dict()

    # Assert
    assert datetime.fromisoformat(data["created_at"]) == stamp
    assert datetime.fromisoformat(data["updated_at"]) == stamp


def test_completed_is_serialized_as_boolean(db_session):
    """Test that the completion flag is a JSON boolean, not 0/1."""
    # Arrange
    task = Task(task="Done", completed=True)
    db_session.session.add(task)
    db_session.session.commit()

    # Act
    data = task.to_dict()

    # Assert
    assert data["completed"] is True


def test_to_dict_has_exactly_the_wire_fields(db_session):
    task = Task(task="Shape")
    db_session.session.add(task)
    db_session.session.commit()

    assert set(task.to_dict()) == {"id", "task", "completed", "created_at", "updated_at"}


def test_ensure_utc_handles_naive_and_offset_datetimes():
    naive = datetime(2024, 1, 1, 8, 0)
    offset = datetime(2024, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))

    assert ensure_utc(naive) == datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
    assert ensure_utc(offset).utcoffset() == timedelta(0)
    assert ensure_utc(offset).hour == 8


def test_task_repr():
    task = Task(id=7, task="Buy milk")

    assert repr(task) == "<Task 7: Buy milk>"
