"""Error Hierarchy — typed, categorized exceptions for every Dziennik failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) never reach the database worker pool
    - Infrastructure errors (500-level) are CRITICAL and terminal for their request
    - to_response() always produces the uniform {"message": str} body
    - No internal details (SQL, driver messages) leak into user-facing messages
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Extra context attached to an error for logs and the observability sink."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    message_type: str | None = None
    worker: str | None = None


class DziennikError(Exception):
    """Base exception for all Dziennik errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the uniform REST error body."""
        return {"message": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestDecodeError(DziennikError):
    """Request body or path segment could not be decoded."""
    def __init__(self, message: str, source: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DECODE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.source = source


class InvalidCredentialsError(DziennikError):
    """Username/password pair did not match a stored user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username or password.",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DziennikError):
    """Store operation failed inside a database worker."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class PoolExhaustedError(DziennikError):
    """No store connection became available within the pool timeout."""
    def __init__(self, timeout: float | None, context: ErrorContext | None = None):
        waited = f" within {timeout:g}s" if timeout is not None else ""
        super().__init__(
            f"No database connection available{waited}",
            "POOL_EXHAUSTED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.timeout = timeout


class WorkerTimeoutError(DziennikError):
    """A database worker did not answer within the configured wait."""
    def __init__(self, message_type: str, timeout: float, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.message_type = message_type
        super().__init__(
            f"Database worker did not answer {message_type} within {timeout:g}s",
            "WORKER_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.CRITICAL, ctx, 504,
        )
        self.timeout = timeout


class UnknownMessageError(DziennikError):
    """A message type with no registered store operation was sent to the pool."""
    def __init__(self, message_type: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.message_type = message_type
        super().__init__(
            f"No store operation registered for {message_type}",
            "UNKNOWN_MESSAGE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
