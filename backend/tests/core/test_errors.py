"""Error Hierarchy — status codes, severities and the uniform response body."""

import pytest

from dziennik.core.errors import (
    DatabaseError, DziennikError, ErrorCategory, ErrorSeverity, InvalidCredentialsError,
    PoolExhaustedError, RequestDecodeError, UnknownMessageError, WorkerTimeoutError,
)


@pytest.mark.parametrize("error,status,severity", [
    (RequestDecodeError("bad", "body"), 400, ErrorSeverity.ERROR),
    (InvalidCredentialsError(), 401, ErrorSeverity.WARNING),
    (DatabaseError("Integrity constraint violated", "commit"), 503, ErrorSeverity.CRITICAL),
    (PoolExhaustedError(30.0), 503, ErrorSeverity.CRITICAL),
    (WorkerTimeoutError("ReadStudents", 2.5), 504, ErrorSeverity.CRITICAL),
    (UnknownMessageError("Promote"), 500, ErrorSeverity.CRITICAL),
])
def test_status_and_severity(error, status, severity):
    assert isinstance(error, DziennikError)
    assert error.http_status == status
    assert error.severity == severity


def test_to_response_is_message_only():
    error = DatabaseError("Connection or operational error", "execute")
    assert error.to_response() == {"message": "Database execute failed: Connection or operational error"}


def test_pool_exhausted_message_mentions_timeout():
    assert PoolExhaustedError(0.5).message == "No database connection available within 0.5s"
    assert PoolExhaustedError(None).message == "No database connection available"


def test_worker_timeout_records_message_type():
    error = WorkerTimeoutError("DeleteStudent", 1.0)
    assert error.context.message_type == "DeleteStudent"
    assert error.category == ErrorCategory.TIMEOUT
