"""API route modules."""
from api.routes import categories, questions, sessions, tests

__all__ = ["categories", "questions", "sessions", "tests"]
