"""Pydantic models."""
from api.models.categories import CategoryCreate
from api.models.questions import QuestionCreate
from api.models.sessions import OptionSelectRequest, SessionCreateRequest
from api.models.tests import TestCreate

__all__ = [
    "CategoryCreate",
    "OptionSelectRequest",
    "QuestionCreate",
    "SessionCreateRequest",
    "TestCreate",
]
