"""Database Worker Pool — bridges async route handlers to the blocking store.

Invariants:
    - Exactly `size` worker threads; each runs one store operation to completion
      before taking the next message
    - Messages wait in a FIFO queue while every worker is busy (no priorities)
    - Each operation opens its own Session, so it holds one pooled connection
      exclusively, and closes it in `finally` (connection returned even on failure)
    - Store failures surface as typed DziennikError values from send(); a failing
      operation never takes a worker or the pool down
    - Pool exhaustion (sqlalchemy TimeoutError) becomes PoolExhaustedError and is
      never retried
    - The pool keeps no record of in-flight messages and exposes no queue API

Design Decisions:
    - ThreadPoolExecutor + loop.run_in_executor: the handler awaits an asyncio
      future, so the event loop keeps accepting requests while workers block
    - One pool handle per process, built in the app lifespan and injected into
      handlers; `size` is read-only after construction
    - Optional `timeout` bounds how long a handler waits for a result; the
      store call itself is not cancelled when it expires
"""

import asyncio
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.orm import Session, sessionmaker

from dziennik.core.errors import (
    DatabaseError, DziennikError, ErrorContext, PoolExhaustedError, WorkerTimeoutError,
)
from dziennik.core.messages import Message
from dziennik.services.store_operations import execute

logger = logging.getLogger(__name__)

R = TypeVar("R")

DEFAULT_WORKER_COUNT = 12


class DatabaseWorkerPool:
    """Fixed set of worker threads executing protocol messages against the store."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        size: int = DEFAULT_WORKER_COUNT,
        timeout: float | None = None,
    ):
        if size < 1:
            raise ValueError("worker pool size must be at least 1")
        self._size = size
        self._timeout = timeout
        self._session_factory = session_factory
        self._executor = ThreadPoolExecutor(
            max_workers=size, thread_name_prefix="db-worker",
        )

    @property
    def size(self) -> int:
        return self._size

    async def send(self, message: Message[R]) -> R:
        """Submit one message and wait (without blocking the loop) for its result."""
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(self._executor, self._handle, message)
        if self._timeout is None:
            return await future
        try:
            return await asyncio.wait_for(future, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise WorkerTimeoutError(type(message).__name__, self._timeout) from e

    def _handle(self, message: Message[R]) -> R:
        """Runs on a worker thread: one unit of work, one connection."""
        message_type = type(message).__name__
        worker = threading.current_thread().name
        db = self._session_factory()
        try:
            result = execute(db, message)
            db.commit()
            return result
        except DziennikError:
            db.rollback()
            raise
        except PoolTimeoutError as e:
            db.rollback()
            logger.error(
                f"Connection pool exhausted while handling {message_type}: {e}",
                extra={"message_type": message_type, "worker": worker},
            )
            raise PoolExhaustedError(
                _pool_timeout(db), _context(message_type, worker),
            ) from e
        except IntegrityError as e:
            db.rollback()
            logger.error(
                f"DB integrity error in {message_type}: {e}",
                extra={"message_type": message_type, "worker": worker},
            )
            raise DatabaseError(
                "Integrity constraint violated", "commit", _context(message_type, worker),
            ) from e
        except OperationalError as e:
            db.rollback()
            logger.error(
                f"DB operational error in {message_type}: {e}",
                extra={"message_type": message_type, "worker": worker},
            )
            raise DatabaseError(
                "Connection or operational error", "execute", _context(message_type, worker),
            ) from e
        except DBAPIError as e:
            db.rollback()
            logger.error(
                f"DB driver error in {message_type}: {e}",
                extra={"message_type": message_type, "worker": worker},
            )
            raise DatabaseError(
                "Database driver error", "query", _context(message_type, worker),
            ) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                f"SQLAlchemy error in {message_type}: {e}",
                extra={"message_type": message_type, "worker": worker},
            )
            raise DatabaseError(
                "Database operation failed", "unknown", _context(message_type, worker),
            ) from e
        finally:
            db.close()

    async def health_check(self) -> bool:
        """Check store connectivity through a worker (for readiness probes)."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self._executor, self._ping)
        except SQLAlchemyError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    def _ping(self) -> bool:
        with self._session_factory() as db:
            db.execute(text("SELECT 1"))
        return True

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
        logger.info("Database worker pool stopped")


def _context(message_type: str, worker: str) -> ErrorContext:
    return ErrorContext(message_type=message_type, worker=worker)


def _pool_timeout(db: Session) -> float | None:
    pool = db.get_bind().pool
    return pool.timeout() if hasattr(pool, "timeout") else None
