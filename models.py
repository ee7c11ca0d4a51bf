# models.py
from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from errors import TaskValidationError


class TaskStatus(str, Enum):
    """Kanban columns. The values are the labels the board sends and displays."""
    TODO = "A Fazer"
    IN_PROGRESS = "Em Progresso"
    DONE = "Concluídas"

    @classmethod
    def parse(cls, value: Union[str, "TaskStatus", None], default: Optional["TaskStatus"] = None) -> "TaskStatus":
        """
        Converts a wire label into a TaskStatus.
        An empty value falls back to `default`; with no default it is rejected.
        """
        if not value:
            if default is None:
                raise TaskValidationError("Invalid status")
            return default
        try:
            return cls(value)
        except ValueError:
            raise TaskValidationError("Invalid status") from None


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(gt=0)
    title: str = Field(alias="titulo", min_length=1)
    description: str = Field(default="", alias="descricao")
    status: TaskStatus

    def to_dict(self) -> Dict:
        """Wire and snapshot representation; `descricao` is left out when empty."""
        data = {"id": self.id, "titulo": self.title}
        if self.description:
            data["descricao"] = self.description
        data["status"] = self.status.value
        return data


# --- Request Bodies ---
# Fields are optional here so that a missing title or status reaches the store
# and is rejected there with the same message as an empty one.

class TaskPayload(BaseModel):
    """Body of POST /tasks and PUT /tasks/{id}."""
    titulo: Optional[str] = None
    descricao: Optional[str] = None
    status: Optional[str] = None
