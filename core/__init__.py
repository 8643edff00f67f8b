"""Quiz session core: state machine, countdown timer and errors."""
from core.errors import (
    InvalidOptionIndexError,
    QuestionSetEmptyError,
    QuizSessionError,
    SessionAlreadyCompletedError,
)
from core.models import Question, QuestionSet, SessionPhase, SessionSnapshot
from core.session import QuizSession
from core.timer import CountdownTimer

__all__ = [
    "CountdownTimer",
    "InvalidOptionIndexError",
    "Question",
    "QuestionSet",
    "QuestionSetEmptyError",
    "QuizSession",
    "QuizSessionError",
    "SessionAlreadyCompletedError",
    "SessionPhase",
    "SessionSnapshot",
]
