"""
Quiz session state machine.

A session walks through a fixed question sequence. The user selects one
option per question, then advances; advancing past the last question (or
running out of time) completes the session. Scoring happens on advance and
at most once per question.
"""
from __future__ import annotations

import asyncio
import logging
import math
import time
from types import MappingProxyType
from typing import Callable

from core.errors import (
    InvalidOptionIndexError,
    QuestionSetEmptyError,
    SessionAlreadyCompletedError,
)
from core.models import (
    OPTION_COUNT,
    AnswerFeedback,
    CompletionReason,
    Question,
    QuestionSet,
    SessionPhase,
    SessionSnapshot,
)
from core.timer import CountdownTimer

logger = logging.getLogger(__name__)

PhaseListener = Callable[[SessionPhase, "QuizSession"], None]
TickListener = Callable[[int, "QuizSession"], None]


def percent(part: int, whole: int) -> int:
    """Whole-number percentage, rounding halves up."""
    if whole <= 0:
        return 0
    return math.floor(100 * part / whole + 0.5)


class QuizSession:
    """One attempt at a single test's question sequence."""

    def __init__(
        self,
        question_set: QuestionSet,
        clock: Callable[[], float] = time.monotonic,
        tick_interval: float = 1.0,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        if not question_set.questions:
            raise QuestionSetEmptyError(question_set.test_id)

        self.question_set = question_set
        self.questions: tuple[Question, ...] = tuple(question_set.questions)
        self.current_index = 0
        self.answered_indices: set[int] = set()
        self.score = 0
        self.phase = SessionPhase.IN_PROGRESS
        self.completion_reason: CompletionReason | None = None

        self._selections: dict[int, int] = {}
        self._clock = clock
        self._started_at = clock()
        self._finished_at: float | None = None
        self._phase_listeners: list[PhaseListener] = []
        self._tick_listeners: list[TickListener] = []
        self._timer = CountdownTimer(
            on_tick=self._handle_tick,
            on_expire=self._handle_expiry,
            interval=tick_interval,
            loop=loop,
        )

    # Lifecycle

    def start(self) -> "QuizSession":
        """Start the countdown for timed tests. Untimed tests need no start."""
        self._timer.start(self.question_set.time_limit)
        return self

    def close(self) -> None:
        """Release the timer. The session keeps its state for reading."""
        self._timer.reset()

    def __enter__(self) -> "QuizSession":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Events

    def select_option(self, index: int) -> bool:
        """
        Record the option chosen for the current question.

        Returns False and leaves the state alone when an option was already
        chosen for this question.
        """
        self._ensure_in_progress()
        if (
            isinstance(index, bool)
            or not isinstance(index, int)
            or not 0 <= index < OPTION_COUNT
        ):
            raise InvalidOptionIndexError(index, OPTION_COUNT)
        if self.current_index in self._selections:
            return False

        self._selections[self.current_index] = index
        return True

    def advance(self) -> SessionPhase:
        """Score the current question once and move on, completing after the last."""
        self._ensure_in_progress()

        index = self.current_index
        if index not in self.answered_indices:
            self.answered_indices.add(index)
            selected = self._selections.get(index)
            if selected is not None and selected == self.questions[index].correct_option:
                self.score += 1

        if index + 1 < len(self.questions):
            self.current_index = index + 1
        else:
            self._complete(CompletionReason.FINISHED)
        return self.phase

    # Observers

    def on_phase_change(self, callback: PhaseListener) -> Callable[[], None]:
        self._phase_listeners.append(callback)
        return lambda: self._remove(self._phase_listeners, callback)

    def on_tick(self, callback: TickListener) -> Callable[[], None]:
        self._tick_listeners.append(callback)
        return lambda: self._remove(self._tick_listeners, callback)

    # Derived values

    @property
    def timer(self) -> CountdownTimer:
        return self._timer

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    @property
    def selected_option(self) -> int | None:
        return self._selections.get(self.current_index)

    @property
    def is_completed(self) -> bool:
        return self.phase == SessionPhase.COMPLETED

    @property
    def is_last_question(self) -> bool:
        return self.current_index == len(self.questions) - 1

    @property
    def progress_percent(self) -> int:
        return percent(len(self.answered_indices), len(self.questions))

    @property
    def accuracy_percent(self) -> int:
        # Only meaningful once completed
        return percent(self.score, len(self.questions))

    @property
    def remaining_seconds(self) -> int | None:
        return self._timer.remaining_seconds

    @property
    def elapsed_seconds(self) -> int:
        end = self._finished_at if self._finished_at is not None else self._clock()
        return int(end - self._started_at)

    def feedback(self) -> AnswerFeedback | None:
        """Correctness of the current selection, once there is one."""
        selected = self.selected_option
        if selected is None:
            return None
        question = self.current_question
        return AnswerFeedback(
            selected_option=selected,
            is_correct=selected == question.correct_option,
            correct_option=question.correct_option,
            explanation=question.explanation,
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            test_id=self.question_set.test_id,
            phase=self.phase,
            question_count=len(self.questions),
            current_index=self.current_index,
            current_question=self.current_question,
            answered_indices=frozenset(self.answered_indices),
            score=self.score,
            selected_option=self.selected_option,
            feedback=self.feedback(),
            progress_percent=self.progress_percent,
            accuracy_percent=self.accuracy_percent,
            is_last_question=self.is_last_question,
            elapsed_seconds=self.elapsed_seconds,
            time_limit=self.question_set.time_limit,
            remaining_seconds=self.remaining_seconds,
            completion_reason=self.completion_reason,
            answers=MappingProxyType(dict(self._selections)),
        )

    # Internals

    def _ensure_in_progress(self) -> None:
        if self.phase == SessionPhase.COMPLETED:
            raise SessionAlreadyCompletedError()

    def _complete(self, reason: CompletionReason) -> None:
        self.phase = SessionPhase.COMPLETED
        self.completion_reason = reason
        self._finished_at = self._clock()
        self._timer.reset()
        logger.debug(
            f"Session for test {self.question_set.test_id} completed "
            f"({reason.value}): {self.score}/{len(self.questions)}"
        )
        self._notify(self._phase_listeners, self.phase)

    def _handle_tick(self, remaining: int) -> None:
        self._notify(self._tick_listeners, remaining)

    def _notify(self, listeners: list, value) -> None:
        # Listener failures are logged; the session keeps going
        for listener in list(listeners):
            try:
                listener(value, self)
            except Exception:
                logger.exception(
                    f"Listener {listener!r} failed for test {self.question_set.test_id}"
                )

    def _handle_expiry(self) -> None:
        if self.phase == SessionPhase.IN_PROGRESS:
            self._complete(CompletionReason.TIME_EXPIRED)

    @staticmethod
    def _remove(listeners: list, callback) -> None:
        if callback in listeners:
            listeners.remove(callback)
