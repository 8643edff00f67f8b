"""Question-related Pydantic models."""
from pydantic import BaseModel, Field

from core.models import OPTION_COUNT


class QuestionCreate(BaseModel):
    """Model for creating or replacing a question."""

    testId: int
    text: str = Field(..., min_length=1)
    options: list[str] = Field(..., min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correctOption: int = Field(..., ge=0, le=OPTION_COUNT - 1)
    explanation: str | None = None
