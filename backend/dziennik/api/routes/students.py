"""Student Routes — create, list, replace and delete student records.

Invariants:
    - Bodies and path ids are decoded by FastAPI before the handler runs;
      decode failures are answered by the boundary translators in error_handlers
    - Each handler sends exactly one message and awaits it once
    - Store errors propagate to the global DziennikError handler (never swallowed)
    - Update with 0 affected rows → 200 {"updated": 0} (business no-op)
    - Delete with 0 affected rows → 400 {"message": str}, unlike Update
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse

from dziennik.api.dependencies import get_worker_pool
from dziennik.core.domain_types import STUDENT_ID_MAX, STUDENT_ID_MIN, StudentId
from dziennik.core.messages import CreateStudent, DeleteStudent, ReadStudents, UpdateStudent
from dziennik.schemas.student import DeleteResponse, StudentIn, StudentOut, UpdateResponse
from dziennik.services.worker_pool import DatabaseWorkerPool

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/students", tags=["students"])

StudentIdPath = Annotated[
    int,
    Path(ge=STUDENT_ID_MIN, le=STUDENT_ID_MAX, description="Store-assigned student id"),
]


@router.post("", response_model=StudentOut, status_code=status.HTTP_200_OK)
async def create_student(
    body: StudentIn, pool: DatabaseWorkerPool = Depends(get_worker_pool),
):
    """Create a student; the store assigns the id."""
    student = await pool.send(CreateStudent(student=body))
    logger.info(f"Created student {student.id}")
    return student


@router.get("", response_model=list[StudentOut])
async def read_students(pool: DatabaseWorkerPool = Depends(get_worker_pool)):
    """List every student, ordered by id."""
    return await pool.send(ReadStudents())


@router.put("/{student_id}", response_model=UpdateResponse)
async def update_student(
    body: StudentIn,
    student_id: StudentIdPath,
    pool: DatabaseWorkerPool = Depends(get_worker_pool),
):
    """Replace all fields of a student. Reports how many rows changed."""
    updated = await pool.send(
        UpdateStudent(student_id=StudentId(student_id), student=body),
    )
    if updated == 0:
        logger.info(f"Update matched no student with id {student_id}")
    return UpdateResponse(updated=updated)


@router.delete("/{student_id}", response_model=DeleteResponse)
async def delete_student(
    student_id: StudentIdPath,
    pool: DatabaseWorkerPool = Depends(get_worker_pool),
):
    """Delete a student. 400 when nothing was deleted."""
    deleted = await pool.send(DeleteStudent(student_id=StudentId(student_id)))
    if deleted > 0:
        logger.info(f"Deleted student {student_id}")
        return DeleteResponse(message=f"Deleted student with id: {student_id}.")
    logger.warning(f"Delete matched no student with id {student_id}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=DeleteResponse(
            message=(
                f"No student with id {student_id} was deleted "
                f"({deleted} rows affected)."
            ),
        ).model_dump(),
    )
