"""Student ORM — one row per student record.

Invariants:
    - id is an integer primary key assigned by the store, never by the caller
    - first_name/last_name are non-nullable; every other column is a nullable scalar
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dziennik.db.base import Base


class Student(Base):
    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    class_name: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
