"""Question database model."""
from __future__ import annotations

import json
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from api.database import Base

if TYPE_CHECKING:
    from api.models.db.quiz_test import QuizTest


class Question(Base):
    """
    Multiple-choice question with exactly four options.
    correct_option is the 0-based index into options.
    """

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    test_id: Mapped[int] = mapped_column(
        ForeignKey("tests.id", ondelete="CASCADE"), nullable=False, index=True
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)

    # Option strings (stored as JSON array)
    options_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    correct_option: Mapped[int] = mapped_column(nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    test: Mapped["QuizTest"] = relationship("QuizTest", back_populates="questions")

    @property
    def options(self) -> list[str]:
        """Parse options from JSON."""
        if not self.options_json:
            return []
        try:
            return json.loads(self.options_json)
        except (json.JSONDecodeError, TypeError):
            return []

    @options.setter
    def options(self, value: list[str] | None) -> None:
        """Serialize options to JSON."""
        self.options_json = json.dumps(list(value or []), ensure_ascii=False)
