from __future__ import annotations

from typing import Any

from api.models.db import Category, Question, QuizTest
from core.models import AnswerFeedback, Question as SessionQuestion, SessionSnapshot


def serialize_category(category: Category) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
    }


def serialize_test(test: QuizTest) -> dict[str, Any]:
    return {
        "id": test.id,
        "name": test.name,
        "categoryId": test.category_id,
        "uploadDate": test.upload_date.isoformat() if test.upload_date else None,
        "timeLimit": test.time_limit,
    }


def serialize_question(question: Question) -> dict[str, Any]:
    return {
        "id": question.id,
        "testId": question.test_id,
        "text": question.text,
        "options": question.options,
        "correctOption": question.correct_option,
        "explanation": question.explanation,
    }


def _serialize_session_question(question: SessionQuestion) -> dict[str, Any]:
    # The correct option is only revealed through feedback
    return {
        "id": question.id,
        "text": question.text,
        "options": list(question.options),
    }


def _serialize_feedback(feedback: AnswerFeedback | None) -> dict[str, Any] | None:
    if feedback is None:
        return None
    return {
        "selectedOption": feedback.selected_option,
        "isCorrect": feedback.is_correct,
        "correctOption": feedback.correct_option,
        "explanation": feedback.explanation,
    }


def serialize_snapshot(session_id: str, snapshot: SessionSnapshot) -> dict[str, Any]:
    return {
        "id": session_id,
        "testId": snapshot.test_id,
        "phase": snapshot.phase.value,
        "questionCount": snapshot.question_count,
        "currentIndex": snapshot.current_index,
        "questionNumber": snapshot.current_index + 1,
        "question": _serialize_session_question(snapshot.current_question),
        "answeredIndices": sorted(snapshot.answered_indices),
        "score": snapshot.score,
        "selectedOption": snapshot.selected_option,
        "feedback": _serialize_feedback(snapshot.feedback),
        "progressPercent": snapshot.progress_percent,
        "accuracyPercent": snapshot.accuracy_percent if snapshot.is_completed else None,
        "isLastQuestion": snapshot.is_last_question,
        "elapsedSeconds": snapshot.elapsed_seconds,
        "timeLimit": snapshot.time_limit,
        "remainingSeconds": snapshot.remaining_seconds,
        "completionReason": (
            snapshot.completion_reason.value if snapshot.completion_reason else None
        ),
    }
