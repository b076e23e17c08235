"""
Shared pytest fixtures for the task list test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Database setup/teardown
- Routing the client's HTTP calls into the Flask test client
"""

import json
import os
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from config import TestingConfig
from todo_app import create_app, db
from todo_app.models import Task
from todo_app.store import TaskStore
from todo_client import ClientState, TaskApiClient, TaskListController

from tests.helpers import make_task


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    Tables are created before the test and dropped afterwards, so ids and
    rows never leak from one test into the next.

    Yields:
        The Flask-SQLAlchemy extension bound to the app context.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def store(db_session) -> TaskStore:
    """Provide a task store bound to the test database session."""
    return TaskStore(db_session.session)


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(store):
    """
    Factory fixture for creating tasks through the store.

    Example:
        def test_something(task_factory):
            task = task_factory("Buy milk")
            assert task.id is not None
    """

    def _create_task(text: str | None = None, completed: bool = False) -> Task:
        task = store.create_task(text or fake.sentence(nb_words=4))
        if completed:
            task = store.update_task(task.id, completed=True)
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single pending task."""
    return task_factory("Sample Task")


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """
    Create three tasks in sequence: A, B (completed), C.

    Returns:
        The tasks in creation order.
    """
    return [
        task_factory("Task A"),
        task_factory("Task B", completed=True),
        task_factory("Task C"),
    ]


# -----------------------------------------------------------------------------
# API Helper Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def api_headers() -> dict[str, str]:
    """
    Provide common headers for API requests.

    Returns:
        Dictionary of HTTP headers.
    """
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }


# -----------------------------------------------------------------------------
# Client Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def fake_api() -> MagicMock:
    """Provide a mock task API client with the real client's interface."""
    return MagicMock(spec=TaskApiClient)


@pytest.fixture
def seeded_controller(fake_api) -> TaskListController:
    """
    Provide a controller whose cache already holds three tasks.

    Order (newest first): 3 "Walk dog" pending, 2 "Pay rent" completed,
    1 "Buy milk" pending.
    """
    state = ClientState(tasks=[
        make_task(3, "Walk dog"),
        make_task(2, "Pay rent", completed=True),
        make_task(1, "Buy milk"),
    ])
    return TaskListController(fake_api, state)


class FlaskTransport:
    """
    Stand-in for ``requests.Session`` that serves requests from a Flask app.

    Lets the real :class:`TaskApiClient` talk to the task store without a
    network. Setting ``down`` makes every call fail like an unreachable host.
    """

    class _Response:
        def __init__(self, flask_response):
            self.status_code = flask_response.status_code
            self._body = flask_response.get_data(as_text=True)

        def json(self) -> Any:
            return json.loads(self._body)

    def __init__(self, test_client, base_url: str):
        self.test_client = test_client
        self.base_url = base_url.rstrip("/")
        self.down = False
        self.calls: list[tuple[str, str]] = []

    def request(self, method: str, url: str, timeout: float | None = None, **kwargs):
        self.calls.append((method, url))
        if self.down:
            raise requests.ConnectionError("task store is down")
        path = url[len(self.base_url.rsplit("/api", 1)[0]):]
        response = self.test_client.open(path, method=method, json=kwargs.get("json"))
        return self._Response(response)


@pytest.fixture
def transport(client, db_session) -> FlaskTransport:
    """Provide a transport that routes client calls into the test app."""
    return FlaskTransport(client, TestingConfig.TASK_API_URL)


@pytest.fixture
def live_controller(transport) -> TaskListController:
    """Provide a controller wired to the real API through the test app."""
    api = TaskApiClient.from_config(TestingConfig, session=transport)
    return TaskListController(api)
