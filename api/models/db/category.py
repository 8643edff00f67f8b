"""Category database model."""
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from api.database import Base

if TYPE_CHECKING:
    from api.models.db.quiz_test import QuizTest


class Category(Base):
    """Top-level grouping of tests shown on the home page."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    tests: Mapped[list["QuizTest"]] = relationship(
        "QuizTest", back_populates="category", cascade="all, delete-orphan"
    )
