"""Auth Schemas — the single credential check behind POST /login."""

from pydantic import BaseModel, ConfigDict, Field


class Credential(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1, max_length=128)


class AuthOutcome(BaseModel):
    """Result of one credential check. No token or session is issued."""
    authenticated: bool
    username: str | None = None
