from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

OPTION_COUNT = 4


class SessionPhase(str, enum.Enum):
    """Coarse status of a quiz session."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class CompletionReason(str, enum.Enum):
    FINISHED = "finished"  # advanced past the last question
    TIME_EXPIRED = "time_expired"


@dataclass(frozen=True)
class Question:
    id: int
    test_id: int
    text: str
    options: tuple[str, ...]
    correct_option: int
    explanation: str | None = None


@dataclass(frozen=True)
class QuestionSet:
    """Questions of one test in display order, plus the test's time limit."""

    test_id: int
    test_name: str
    category_id: int
    questions: tuple[Question, ...]
    time_limit: int | None = None  # minutes


@dataclass(frozen=True)
class AnswerFeedback:
    selected_option: int
    is_correct: bool
    correct_option: int
    explanation: str | None = None


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session at one point in time."""

    test_id: int
    phase: SessionPhase
    question_count: int
    current_index: int
    current_question: Question
    answered_indices: frozenset[int]
    score: int
    selected_option: int | None
    feedback: AnswerFeedback | None
    progress_percent: int
    accuracy_percent: int
    is_last_question: bool
    elapsed_seconds: int
    time_limit: int | None = None
    remaining_seconds: int | None = None
    completion_reason: CompletionReason | None = None
    answers: Mapping[int, int] = field(
        default_factory=lambda: MappingProxyType({})
    )  # question index -> selected option

    @property
    def is_completed(self) -> bool:
        return self.phase == SessionPhase.COMPLETED
