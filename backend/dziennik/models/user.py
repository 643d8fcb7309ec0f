"""User ORM — credentials checked by the login endpoint.

Invariants:
    - username is unique
    - password_hash is a bcrypt hash; plain passwords are never stored
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dziennik.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
