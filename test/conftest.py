
import pytest
from pathlib import Path
from typing import List

from fastapi.testclient import TestClient

from config import Settings
from errors import PersistenceError
from main import create_app
from models import Task
from storage import TaskFileStorage
from task_store import TaskStore


class FailingStorage(TaskFileStorage):
    """Storage whose writes always fail, for the best-effort persistence tests."""

    def __init__(self, path):
        super().__init__(path)
        self.save_attempts = 0

    def save(self, tasks: List[Task]):
        self.save_attempts += 1
        raise PersistenceError("disk full")


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Snapshot path inside a per-test temporary directory. The file does not exist yet."""
    return tmp_path / "data.json"


@pytest.fixture
def storage(data_file: Path) -> TaskFileStorage:
    return TaskFileStorage(data_file)


@pytest.fixture
def failing_storage(data_file: Path) -> FailingStorage:
    return FailingStorage(data_file)


@pytest.fixture
def store(storage: TaskFileStorage) -> TaskStore:
    """A freshly loaded, empty store."""
    task_store = TaskStore(storage)
    task_store.load_from_persistence()
    return task_store


@pytest.fixture
def client(data_file: Path):
    """
    A TestClient around a brand-new app. Entering the context runs the
    lifespan, which loads the snapshot.
    """
    app = create_app(Settings(data_file=data_file))
    with TestClient(app) as test_client:
        yield test_client
