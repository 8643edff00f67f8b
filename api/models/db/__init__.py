"""Database models."""
from api.models.db.category import Category
from api.models.db.question import Question
from api.models.db.quiz_test import QuizTest

__all__ = [
    "Category",
    "Question",
    "QuizTest",
]
