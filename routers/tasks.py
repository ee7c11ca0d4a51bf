# routers/tasks.py
from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from dependencies import get_task_store
from models import TaskPayload
from task_store import TaskStore

# --- Router Setup ---
router = APIRouter(
    prefix="/tasks",
    tags=["Task Management"],
)

# --- Endpoints ---
# Plain `def` endpoints run in the threadpool; TaskStore serializes them with its lock.

@router.get("")
def get_tasks(store: TaskStore = Depends(get_task_store)):
    """Get the list of all tasks in creation order."""
    return [task.to_dict() for task in store.list_tasks()]

@router.post("", status_code=HTTP_201_CREATED)
def create_task(payload: TaskPayload, store: TaskStore = Depends(get_task_store)):
    """Creates a task. The status defaults to the first column."""
    task = store.create_task(payload.titulo or "", payload.descricao or "", payload.status)
    return task.to_dict()

@router.put("/{task_id}")
def update_task(task_id: int, payload: TaskPayload, store: TaskStore = Depends(get_task_store)):
    """Replaces title, description and status of an existing task."""
    task = store.update_task(task_id, payload.titulo or "", payload.descricao or "", payload.status)
    return task.to_dict()

@router.delete("/{task_id}", status_code=HTTP_204_NO_CONTENT)
def delete_task(task_id: int, store: TaskStore = Depends(get_task_store)):
    store.delete_task(task_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
