"""Store Connection Pool — synchronous SQLAlchemy engine and session factory.

Invariants:
    - One engine per process; its QueuePool owns every live store connection
    - A checkout waits at most pool_timeout seconds, then raises sqlalchemy.exc.TimeoutError
    - Sessions are created per unit of work and borrow exactly one connection
    - pool_pre_ping detects stale connections before they are lent out

Design Decisions:
    - expire_on_commit=False: results are converted to schemas after commit
      on the worker thread, before the session closes
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


def create_store_engine(
    database_url: str,
    pool_size: int = 12,
    max_overflow: int = 0,
    pool_timeout: float = 30.0,
) -> Engine:
    """Create the engine whose connection pool backs the database worker pool."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=pool_timeout,
        pool_pre_ping=True,
        pool_recycle=3600,
        connect_args=connect_args,
    )
    logger.info(
        f"Store engine ready (pool_size={pool_size}, "
        f"max_overflow={max_overflow}, pool_timeout={pool_timeout:g}s)",
    )
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create the session factory database workers open units of work with."""
    return sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False,
    )
