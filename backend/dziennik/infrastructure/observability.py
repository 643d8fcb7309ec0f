"""Observability — structured logging setup and the external error sink.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (error_code, path, message_type, worker) surfaced when present
    - ErrorReporter never raises: a sink outage must not change the HTTP response
    - Without an endpoint, ErrorReporter only logs

Design Decisions:
    - setup_logging called once on startup via lifespan
    - Sink events are plain JSON POSTs over httpx.AsyncClient with a short
      timeout; error handlers schedule them as response background tasks
"""

import json
import logging
from datetime import datetime, timezone

import httpx

from dziennik.core.errors import ErrorSeverity

logger = logging.getLogger(__name__)

_EXTRA_FIELDS = ("error_code", "path", "message_type", "worker", "severity")

_SEVERITY_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


def log_level_for(severity: ErrorSeverity) -> int:
    return _SEVERITY_LEVELS.get(severity, logging.ERROR)


class ErrorReporter:
    """Sends error events to an external observability endpoint."""

    def __init__(
        self,
        endpoint: str | None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 2.0,
    ):
        self.endpoint = endpoint
        self._client = client
        if self._client is None and endpoint:
            self._client = httpx.AsyncClient(timeout=timeout)

    async def capture_message(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        path: str | None = None,
    ) -> None:
        """Report one event. Delivery failures are logged, never raised."""
        if not self.endpoint or self._client is None:
            return
        event = {
            "message": message,
            "level": severity.value,
            "path": path,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        try:
            response = await self._client.post(self.endpoint, json=event)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Observability sink delivery failed: {e}")

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
