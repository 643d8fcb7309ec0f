"""Store Operations — one blocking function per protocol message.

Invariants:
    - Every message type maps to exactly one operation in STORE_OPERATIONS
    - Operations receive an open Session and never commit, roll back or close it
      (the worker owns the unit of work)
    - ORM objects never leave this module: results are converted to schemas
      before they cross back to the event loop

Design Decisions:
    - Explicit dict over getattr/singledispatch: every mapping visible in one place
    - Update/Delete are bulk statements so the driver's rowcount is the result
"""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from dziennik.core.errors import UnknownMessageError
from dziennik.core.messages import (
    Authenticate, CreateStudent, DeleteStudent, Message, ReadStudents, UpdateStudent,
)
from dziennik.infrastructure.passwords import verify_password
from dziennik.models.student import Student
from dziennik.models.user import User
from dziennik.schemas.auth import AuthOutcome
from dziennik.schemas.student import StudentOut

logger = logging.getLogger(__name__)


def create_student(db: Session, message: CreateStudent) -> StudentOut:
    student = Student(**message.student.model_dump())
    db.add(student)
    db.flush()
    return StudentOut.model_validate(student)


def read_students(db: Session, message: ReadStudents) -> list[StudentOut]:
    rows = db.execute(select(Student).order_by(Student.id)).scalars().all()
    return [StudentOut.model_validate(row) for row in rows]


def update_student(db: Session, message: UpdateStudent) -> int:
    result = db.execute(
        update(Student)
        .where(Student.id == message.student_id)
        .values(**message.student.model_dump())
        .execution_options(synchronize_session=False),
    )
    return result.rowcount


def delete_student(db: Session, message: DeleteStudent) -> int:
    result = db.execute(
        delete(Student)
        .where(Student.id == message.student_id)
        .execution_options(synchronize_session=False),
    )
    return result.rowcount


def authenticate(db: Session, message: Authenticate) -> AuthOutcome:
    username = message.credential.username
    user = db.execute(
        select(User).where(User.username == username),
    ).scalar_one_or_none()
    if user is None or not verify_password(message.credential.password, user.password_hash):
        logger.info(f"Credential check failed for {username!r}")
        return AuthOutcome(authenticated=False)
    return AuthOutcome(authenticated=True, username=user.username)


# Adding a message type requires editing this dict
STORE_OPERATIONS: dict[type[Message], Callable[[Session, Any], Any]] = {
    CreateStudent: create_student,
    ReadStudents: read_students,
    UpdateStudent: update_student,
    DeleteStudent: delete_student,
    Authenticate: authenticate,
}


def execute(db: Session, message: Message) -> Any:
    """Run the store operation registered for the message's type."""
    operation = STORE_OPERATIONS.get(type(message))
    if operation is None:
        raise UnknownMessageError(type(message).__name__)
    return operation(db, message)
