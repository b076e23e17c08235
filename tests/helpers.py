"""Test data builders shared by fixtures and test modules."""

from typing import Any


def make_task(task_id: int, text: str, completed: bool = False) -> dict[str, Any]:
    """Build a canonical task record as the API would return it."""
    stamp = "2024-01-01T00:00:00+00:00"
    return {
        "id": task_id,
        "task": text,
        "completed": completed,
        "created_at": stamp,
        "updated_at": stamp,
    }
