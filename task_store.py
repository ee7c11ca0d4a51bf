# task_store.py
import logging
import threading
from typing import List, Optional

from errors import PersistenceError, SnapshotNotFoundError, TaskNotFoundError, TaskValidationError
from models import Task, TaskStatus
from storage import TaskFileStorage

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory authority for the task list and the id counter.

    Every operation holds the same lock for its full duration, including the
    snapshot write, so concurrent requests never see a half-applied change.
    Ids only grow: a deleted id is never handed out again by this process.
    """

    def __init__(self, storage: TaskFileStorage):
        self._storage = storage
        self._tasks: List[Task] = []
        self._next_id = 1
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load_from_persistence(self):
        """
        Replaces the in-memory state with the snapshot on disk.
        A missing snapshot starts an empty board; a corrupt one raises
        StartupPersistenceError and the caller must not serve requests.
        """
        with self._lock:
            try:
                tasks = self._storage.load()
            except SnapshotNotFoundError:
                logger.info("Snapshot %s not found. Starting with an empty task list.", self._storage.path)
                tasks = []

            self._tasks = tasks
            self._next_id = max((task.id for task in tasks), default=0) + 1
            self._loaded = True
            logger.info("Loaded %d tasks from %s. Next id: %d", len(tasks), self._storage.path, self._next_id)

    def list_tasks(self) -> List[Task]:
        with self._lock:
            return [task.model_copy() for task in self._tasks]

    def create_task(self, title: str, description: str = "", status: Optional[str] = None) -> Task:
        _require_title(title)
        task_status = TaskStatus.parse(status, default=TaskStatus.TODO)

        with self._lock:
            task = Task(id=self._next_id, title=title, description=description or "", status=task_status)
            self._next_id += 1
            self._tasks.append(task)
            self._persist_best_effort()
            logger.info("Created task %d", task.id)
            return task.model_copy()

    def update_task(self, task_id: int, title: str, description: str, status: Optional[str]) -> Task:
        _require_title(title)
        task_status = TaskStatus.parse(status)

        with self._lock:
            task = self._find(task_id)
            task.title = title
            task.description = description or ""
            task.status = task_status
            self._persist_best_effort()
            logger.info("Updated task %d", task_id)
            return task.model_copy()

    def delete_task(self, task_id: int):
        with self._lock:
            task = self._find(task_id)
            self._tasks.remove(task)
            self._persist_best_effort()
            logger.info("Deleted task %d", task_id)

    def _find(self, task_id: int) -> Task:
        task = next((t for t in self._tasks if t.id == task_id), None)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _persist_best_effort(self):
        """
        Writes the snapshot while the lock is held.
        A failed write is logged and swallowed: the in-memory list stays the
        system of record and the request that triggered the write still succeeds.
        """
        try:
            self._storage.save(self._tasks)
        except PersistenceError as e:
            logger.error("Failed to persist %d tasks: %s", len(self._tasks), e)


def _require_title(title: Optional[str]):
    if not title:
        raise TaskValidationError("Field 'titulo' is required")
