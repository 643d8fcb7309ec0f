"""Dziennik API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DziennikError / RequestValidationError → {"message": str}
    - CORS configured from settings: GET/POST/PUT/DELETE with a fixed preflight max_age
    - The database worker pool and error reporter are built once in the lifespan,
      stored on app.state and injected into handlers; never rebuilt

Design Decisions:
    - create_app() factory so tests can build an app and inject their own
      worker pool without running the lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dziennik.api.error_handlers import register_error_handlers
from dziennik.api.routes import health, login, students
from dziennik.config import Settings, get_settings
from dziennik.infrastructure.database import create_session_factory, create_store_engine
from dziennik.infrastructure.observability import ErrorReporter, setup_logging
from dziennik.services.worker_pool import DatabaseWorkerPool

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    engine = create_store_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout,
    )
    worker_pool = DatabaseWorkerPool(
        create_session_factory(engine),
        size=settings.worker_count,
        timeout=settings.worker_timeout_seconds,
    )
    reporter = ErrorReporter(settings.observability_endpoint)
    app.state.worker_pool = worker_pool
    app.state.error_reporter = reporter
    logger.info(f"Dziennik API started with {worker_pool.size} database workers")
    try:
        yield
    finally:
        logger.info("Dziennik API shutting down")
        worker_pool.shutdown()
        engine.dispose()
        await reporter.aclose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Dziennik API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        max_age=settings.cors_max_age,
    )

    app.include_router(health.router)
    app.include_router(students.router)
    app.include_router(login.router)

    register_error_handlers(app)
    return app


app = create_app()
