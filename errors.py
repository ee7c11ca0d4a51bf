# errors.py
"""Exceptions raised by the task store and its persistence adapter."""


class KanbanError(Exception):
    """Base class for every error raised by the backend."""


class TaskValidationError(KanbanError):
    """A required field is missing or a value is outside its allowed set."""


class TaskNotFoundError(KanbanError):
    """The requested task id does not exist."""

    def __init__(self, task_id: int):
        super().__init__("Task not found")
        self.task_id = task_id


class PersistenceError(KanbanError):
    """The snapshot could not be serialized or written."""


class SnapshotNotFoundError(KanbanError):
    """There is no snapshot file yet."""


class StartupPersistenceError(KanbanError):
    """The snapshot exists but cannot be read or parsed."""
