"""ORM Models — SQLAlchemy declarative models for students and users.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all
"""

from dziennik.models.student import Student  # noqa: F401
from dziennik.models.user import User  # noqa: F401
