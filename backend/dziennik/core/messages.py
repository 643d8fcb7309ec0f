"""Message Protocol — typed commands sent from route handlers to the database worker pool.

Invariants:
    - Closed set: CreateStudent, ReadStudents, UpdateStudent, DeleteStudent, Authenticate
    - Each message is a frozen dataclass holding exactly the data its store operation needs
    - Message[R] fixes the result type R per message class; handlers never inspect
      a message to learn what comes back
    - Messages own no resources (no sessions, no connections)

Design Decisions:
    - Frozen dataclasses over Pydantic models: messages are internal values,
      validation already happened at the HTTP boundary
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from dziennik.core.domain_types import StudentId
from dziennik.schemas.auth import AuthOutcome, Credential
from dziennik.schemas.student import StudentIn, StudentOut

R = TypeVar("R")


class Message(Generic[R]):
    """Base class for protocol messages. R is the success result type."""


@dataclass(frozen=True)
class CreateStudent(Message[StudentOut]):
    """Insert a new student. Result: the created record with its assigned id."""
    student: StudentIn


@dataclass(frozen=True)
class ReadStudents(Message[list[StudentOut]]):
    """Full-table read. Result: every student, ordered by id."""


@dataclass(frozen=True)
class UpdateStudent(Message[int]):
    """Replace all fields of one student. Result: affected-row count (0 = no such id)."""
    student_id: StudentId
    student: StudentIn


@dataclass(frozen=True)
class DeleteStudent(Message[int]):
    """Delete one student. Result: affected-row count (0 = no such id)."""
    student_id: StudentId


@dataclass(frozen=True)
class Authenticate(Message[AuthOutcome]):
    """Check one credential against stored users."""
    credential: Credential
