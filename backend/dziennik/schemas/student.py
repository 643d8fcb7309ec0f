"""Student Schemas — request bodies and responses for /students routes.

Invariants:
    - StudentIn never carries an id (ids are assigned by the store)
    - StudentOut always carries the id of a persisted row
    - Names are stripped and must stay non-empty
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StudentIn(BaseModel):
    """New or replacement student fields."""
    model_config = ConfigDict(frozen=True)

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    class_name: str | None = Field(None, max_length=20)
    email: str | None = Field(None, max_length=255)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class StudentOut(StudentIn):
    """Persisted student record."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int


class UpdateResponse(BaseModel):
    updated: int


class DeleteResponse(BaseModel):
    message: str
