# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from config import Settings, load_settings
from errors import TaskNotFoundError, TaskValidationError
from routers import tasks
from storage import TaskFileStorage
from task_store import TaskStore

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# --- App Lifecycle (Lifespan) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Loads the snapshot before the first request is served.
    A corrupt snapshot raises here, which aborts startup.
    """
    store: TaskStore = app.state.store
    if not store.is_loaded:
        store.load_from_persistence()
    yield
    logger.info("Application shutting down...")

# --- Middleware ---
async def cors_middleware(request: Request, call_next):
    """Answers every OPTIONS request directly and adds CORS headers to everything else."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response

# --- Error Handlers ---
# Errors go back as plain text, one status code per outcome.

async def handle_task_validation_error(request: Request, exc: TaskValidationError):
    return PlainTextResponse(str(exc), status_code=HTTP_400_BAD_REQUEST)

async def handle_task_not_found(request: Request, exc: TaskNotFoundError):
    return PlainTextResponse(str(exc), status_code=HTTP_404_NOT_FOUND)

async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(error.get("loc", ("",))[0] == "path" for error in errors):
        message = "Invalid ID"
    else:
        message = "Invalid JSON"
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, errors)
    return PlainTextResponse(message, status_code=HTTP_400_BAD_REQUEST)

async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def create_app(settings: Optional[Settings] = None, store: Optional[TaskStore] = None) -> FastAPI:
    """
    Builds the application with its own TaskStore.
    Pass `store` to reuse one that was already created (and possibly loaded).
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Kanban Tasks",
        description="CRUD backend for a Kanban board, persisted to a JSON file.",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.store = store or TaskStore(TaskFileStorage(settings.data_file))

    app.middleware("http")(cors_middleware)

    app.add_exception_handler(TaskValidationError, handle_task_validation_error)
    app.add_exception_handler(TaskNotFoundError, handle_task_not_found)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)

    # --- Include API Routers ---
    app.include_router(tasks.router)
    return app


app = create_app()

# --- Main Entry Point ---
if __name__ == "__main__":
    from cli import main
    main()
