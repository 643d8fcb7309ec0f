"""Error Handlers — boundary translators and global exception handlers.

Invariants:
    - Malformed JSON bodies and unparsable path segments become 400 {"message": str}
      before any route handler runs, so they never reach the database worker pool
    - Boundary errors are logged at ERROR and reported to the observability sink
      in a background task, after the response has been sent
    - DziennikError → its own http_status with {"message": str}
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - One RequestValidationError handler for every route; it picks the path
      translator when any path segment failed (paths are decoded before bodies),
      else the body translator
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.background import BackgroundTask

from dziennik.api.dependencies import get_error_reporter
from dziennik.core.errors import DziennikError, ErrorSeverity, RequestDecodeError
from dziennik.infrastructure.observability import log_level_for

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_dziennik_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


# ─── Boundary translators ───────────────────────────────────────

async def json_error_handler(
    request: Request, errors: Sequence[dict[str, Any]],
) -> JSONResponse:
    """Translate a body decode failure into a 400 response."""
    message = f"Json deserialize error: {describe_errors(errors)}"
    logger.error(
        f"Bad json data: {message}",
        extra={"error_code": "DECODE_ERROR", "path": request.url.path},
    )
    return await _translate(request, RequestDecodeError(message, "body"))


async def path_error_handler(
    request: Request, errors: Sequence[dict[str, Any]],
) -> JSONResponse:
    """Translate a path segment decode failure into a 400 response."""
    message = f"Invalid path parameter: {describe_errors(errors)}"
    logger.error(
        f"Bad path id: {message}",
        extra={"error_code": "DECODE_ERROR", "path": request.url.path},
    )
    return await _translate(request, RequestDecodeError(message, "path"))


async def _translate(request: Request, exc: RequestDecodeError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_response(),
        background=_report(request, exc.message, ErrorSeverity.ERROR),
    )


def _report(
    request: Request, message: str, severity: ErrorSeverity,
) -> BackgroundTask | None:
    """Sink delivery runs after the response is sent."""
    reporter = get_error_reporter(request)
    if reporter is None:
        return None
    return BackgroundTask(
        reporter.capture_message, message, severity, request.url.path,
    )


def describe_errors(errors: Sequence[dict[str, Any]]) -> str:
    """Flatten Pydantic error dicts into one readable line."""
    parts = []
    for e in errors:
        loc = tuple(e.get("loc", ()))
        msg = e.get("msg", "invalid value")
        if e.get("type") == "json_invalid":
            reason = (e.get("ctx") or {}).get("error")
            detail = f"{msg} ({reason})" if reason else msg
            parts.append(f"{detail} at position {loc[1]}" if len(loc) > 1 else detail)
            continue
        field = ".".join(str(p) for p in loc[1:])
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "invalid request"


# ─── Global handlers ────────────────────────────────────────────

def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        errors = exc.errors()
        path_errors = [e for e in errors if e.get("loc", ("",))[0] == "path"]
        if path_errors:
            return await path_error_handler(request, path_errors)
        return await json_error_handler(request, errors)


def _register_dziennik_error_handler(app: FastAPI) -> None:

    @app.exception_handler(DziennikError)
    async def dziennik_error_handler(request: Request, exc: DziennikError):
        """Handle all Dziennik domain/infrastructure errors."""
        logger.log(
            log_level_for(exc.severity),
            f"DziennikError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "message_type": exc.context.message_type,
                "worker": exc.context.worker,
            },
        )
        background = None
        if exc.severity == ErrorSeverity.CRITICAL:
            background = _report(request, exc.message, exc.severity)
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            background=background,
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An unexpected error occurred"},
            background=_report(
                request, f"Unhandled exception: {type(exc).__name__}",
                ErrorSeverity.CRITICAL,
            ),
        )
