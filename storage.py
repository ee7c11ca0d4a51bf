# storage.py
import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from errors import PersistenceError, SnapshotNotFoundError, StartupPersistenceError
from models import Task

logger = logging.getLogger(__name__)


class TaskFileStorage:
    """Reads and overwrites the JSON snapshot holding every task."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[Task]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise SnapshotNotFoundError(f"{self.path} does not exist") from None
        except (OSError, UnicodeDecodeError) as e:
            raise StartupPersistenceError(f"Could not read {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StartupPersistenceError(f"Could not decode JSON in {self.path}: {e}") from e

        # `null` counts as an empty snapshot.
        if data is None:
            return []
        if not isinstance(data, list):
            raise StartupPersistenceError(f"{self.path} must contain a JSON array of tasks")

        tasks: List[Task] = []
        seen_ids = set()
        for index, entry in enumerate(data):
            try:
                task = Task.model_validate(entry)
            except ValidationError as e:
                raise StartupPersistenceError(f"Invalid task at position {index} in {self.path}: {e}") from e
            if task.id in seen_ids:
                raise StartupPersistenceError(f"Duplicate task id {task.id} in {self.path}")
            seen_ids.add(task.id)
            tasks.append(task)
        return tasks

    def save(self, tasks: List[Task]):
        """Serializes the full collection and replaces the file content."""
        try:
            payload = json.dumps([task.to_dict() for task in tasks], indent=2, ensure_ascii=False)
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(payload)
        except (TypeError, ValueError, OSError) as e:
            raise PersistenceError(f"Could not write {self.path}: {e}") from e
        logger.debug("Wrote %d tasks to %s", len(tasks), self.path)
