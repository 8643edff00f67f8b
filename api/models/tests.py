"""Test-related Pydantic models."""
from pydantic import BaseModel, Field


class TestCreate(BaseModel):
    """Model for creating or replacing a test."""

    name: str = Field(..., min_length=1, max_length=200)
    categoryId: int
    timeLimit: int | None = Field(default=None, gt=0)
