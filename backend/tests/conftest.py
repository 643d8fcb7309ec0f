"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh file-backed SQLite database with a real QueuePool
    - The app's lifespan is not run: tests inject the worker pool and error
      reporter onto app.state directly
    - CountingWorkerPool records every message that reached the pool, so tests
      can prove decode errors never get that far
    - RecordingReporter captures observability events instead of sending them

Design Decisions:
    - File-backed SQLite over :memory:: each worker thread checks out its own
      connection, like against PostgreSQL
"""

import os

# Ensure tests never point at a real database or observability sink
os.environ.setdefault("DATABASE_URL", "sqlite:///test.db")
os.environ.pop("OBSERVABILITY_ENDPOINT", None)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from dziennik.core.errors import ErrorSeverity  # noqa: E402
from dziennik.db.base import Base  # noqa: E402
from dziennik.infrastructure.database import (  # noqa: E402
    create_session_factory, create_store_engine,
)
from dziennik.infrastructure.observability import ErrorReporter  # noqa: E402
from dziennik.infrastructure.passwords import hash_password  # noqa: E402
from dziennik.main import create_app  # noqa: E402
from dziennik.models.user import User  # noqa: E402
from dziennik.services.worker_pool import DatabaseWorkerPool  # noqa: E402
import dziennik.models  # noqa: E402,F401


class CountingWorkerPool(DatabaseWorkerPool):
    """Worker pool that records every message sent to it."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sent = []

    async def send(self, message):
        self.sent.append(message)
        return await super().send(message)


class RecordingReporter(ErrorReporter):
    """Error reporter that keeps events in memory."""

    def __init__(self):
        super().__init__(None)
        self.events: list[tuple[str, ErrorSeverity, str | None]] = []

    async def capture_message(self, message, severity=ErrorSeverity.ERROR, path=None):
        self.events.append((message, severity, path))


@pytest.fixture
def test_engine(tmp_path):
    engine = create_store_engine(
        f"sqlite:///{tmp_path / 'dziennik.db'}",
        pool_size=12, max_overflow=0, pool_timeout=5,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
def worker_pool(test_session_factory):
    pool = CountingWorkerPool(test_session_factory, size=12)
    yield pool
    pool.shutdown()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
async def client(worker_pool, reporter):
    """FastAPI test client with the worker pool and reporter injected."""
    app = create_app()
    app.state.worker_pool = worker_pool
    app.state.error_reporter = reporter
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def seed_user(test_session_factory):
    """Insert one user; returns its plain credential."""
    credential = {"username": "nauczyciel", "password": "tajne-haslo-123"}
    with test_session_factory() as db:
        db.add(User(
            username=credential["username"],
            password_hash=hash_password(credential["password"]),
        ))
        db.commit()
    return credential
