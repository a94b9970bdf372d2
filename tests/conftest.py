import pytest
from datetime import datetime, timedelta, timezone

from taskboard.adapters.memory.storage import InMemoryStorage
from taskboard.domain.task import Task, TaskId
from taskboard.services.task_service import TaskService
from fakes import FakeClock, FakeConfirmer, FakeIdProvider


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def confirmer():
    return FakeConfirmer()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def service(storage, clock, confirmer):
    svc = TaskService(storage, storage, FakeIdProvider(), clock, confirmer)
    svc.load()
    return svc


@pytest.fixture
def make_task():
    """Fabryka zadań z sensownymi domyślnymi wartościami."""
    base = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def _make(task_id: str, title: str = "Test", minutes: int = 0, **fields) -> Task:
        completed = fields.get("completed", False)
        fields.setdefault("completed_at", base + timedelta(minutes=minutes) if completed else None)
        return Task(
            task_id=TaskId(task_id),
            title=title,
            created_at=base + timedelta(minutes=minutes),
            **fields,
        )

    return _make
