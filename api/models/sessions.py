"""Quiz session Pydantic models."""
from pydantic import BaseModel, Field


class SessionCreateRequest(BaseModel):
    """Model for starting a session on a test."""

    clientId: str | None = None


class OptionSelectRequest(BaseModel):
    """Model for choosing an option on the current question."""

    option: int = Field(strict=True)
