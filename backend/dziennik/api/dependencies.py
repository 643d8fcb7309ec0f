"""Request-scoped access to process-wide handles stored on app.state."""

from fastapi import Request

from dziennik.infrastructure.observability import ErrorReporter
from dziennik.services.worker_pool import DatabaseWorkerPool


def get_worker_pool(request: Request) -> DatabaseWorkerPool:
    """FastAPI dependency for the shared database worker pool."""
    pool = getattr(request.app.state, "worker_pool", None)
    if pool is None:
        raise RuntimeError("Database worker pool not initialized")
    return pool


def get_error_reporter(request: Request) -> ErrorReporter | None:
    return getattr(request.app.state, "error_reporter", None)
