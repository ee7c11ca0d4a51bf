# dependencies.py
from fastapi import Request

from task_store import TaskStore


def get_task_store(request: Request) -> TaskStore:
    """
    Returns the TaskStore created for this application in create_app().
    Tests get a fresh store simply by building a new app.
    """
    return request.app.state.store
