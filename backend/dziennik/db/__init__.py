"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - All ORM models inherit from db.base.Base
    - Engines and sessions are synchronous; they are only used on worker threads
"""
