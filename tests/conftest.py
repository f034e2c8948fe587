"""Pytest fixtures and configuration for SalesPulse tests."""

import pytest
import uuid
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from salespulse.models.task import Task, TaskStatus, TaskPriority
from salespulse.store.task_store import TaskStore


@pytest.fixture
def now():
    """Fixed reference time (a Wednesday) for deterministic tests."""
    return datetime(2024, 3, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_task_base(now):
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "id": str(uuid.uuid4()),
        "title": "Follow up with Acme",
        "revenue": 1000.0,
        "time_taken": 4.0,
        "priority": TaskPriority.MEDIUM,
        "status": TaskStatus.TODO,
        "notes": None,
        "created_at": now,
        "completed_at": None,
    }


@pytest.fixture
def make_task(sample_task_base):
    """Factory building a Task from the base data plus overrides."""
    def _make(**overrides) -> Task:
        data = {**sample_task_base, "id": str(uuid.uuid4()), **overrides}
        return Task(**data)
    return _make


@pytest.fixture
def store(now):
    """Empty task store with a frozen clock."""
    return TaskStore(clock=lambda: now)


@pytest.fixture
def test_client(store, monkeypatch):
    """FastAPI test client wired to the fixture store (no startup load)."""
    from salespulse.api import app as app_module
    from salespulse.api.app import app, get_store

    monkeypatch.setattr(app_module.settings, "load_on_startup", False)
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
