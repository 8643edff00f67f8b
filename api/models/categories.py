"""Category-related Pydantic models."""
from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Model for creating or replacing a category."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str
