"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, get_settings
from .db import TaskStore
from .errors import (
    StoreUnavailableError,
    TaskNotFoundError,
    TaskTrackerError,
    TaskValidationError,
)
from .logging_config import configure_logging, get_logger
from .routers import tasks

logger = get_logger(__name__)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    parts = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        if error.get("type") == "extra_forbidden":
            parts.append(f"Invalid update field '{'.'.join(loc)}'")
        elif loc:
            parts.append(f"{'.'.join(loc)}: {error.get('msg')}")
        else:
            parts.append(str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Map task tracker errors to HTTP responses."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        detail = _describe_validation_errors(exc)
        logger.info("rejected request", path=request.url.path, detail=detail)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": detail},
        )

    @app.exception_handler(TaskValidationError)
    async def task_validation_handler(request: Request, exc: TaskValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(TaskNotFoundError)
    async def task_not_found_handler(request: Request, exc: TaskNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Task not found"},
        )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
        logger.error("store failure", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Task store unavailable"},
        )

    @app.exception_handler(TaskTrackerError)
    async def task_tracker_error_handler(request: Request, exc: TaskTrackerError):
        logger.error("unhandled task tracker error", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def create_app(settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    """Build the application around a task store.

    The store is opened on startup and closed on shutdown; a store that
    cannot be opened aborts startup.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)
    store = store or TaskStore(settings.database_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the task store on startup and close it on shutdown."""
        store.init()
        logger.info("service started", app_name=settings.app_name)
        try:
            yield
        finally:
            store.close()
            logger.info("service stopped", app_name=settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="Task tracking REST API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(tasks.router)
    return app


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "task_tracker.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
