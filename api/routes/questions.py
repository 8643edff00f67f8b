"""Question management endpoints."""
from fastapi import APIRouter, Query, Response, status

from api.models import QuestionCreate
from api.repositories import QuestionRepository, TestRepository
from api.services.test_service import require_question, require_test
from serialization import serialize_question

router = APIRouter(prefix="/api/questions", tags=["questions"])


def _question_values(payload: QuestionCreate) -> dict[str, object]:
    return {
        "test_id": payload.testId,
        "text": payload.text,
        "options": payload.options,
        "correct_option": payload.correctOption,
        "explanation": payload.explanation,
    }


@router.get("")
def list_questions(
    questions: QuestionRepository,
    test_id: int | None = Query(default=None, alias="testId"),
) -> list[dict[str, object]]:
    """List questions, optionally only those of one test."""
    return [serialize_question(q) for q in questions.list(test_id=test_id)]


@router.get("/{question_id}")
def get_question(question_id: int, questions: QuestionRepository) -> dict[str, object]:
    """Get question."""
    return serialize_question(require_question(questions, question_id))


@router.post("", status_code=status.HTTP_201_CREATED)
def add_question(
    payload: QuestionCreate,
    questions: QuestionRepository,
    tests: TestRepository,
) -> dict[str, object]:
    """Add new question to a test."""
    require_test(tests, payload.testId)
    question = questions.create(**_question_values(payload))
    return serialize_question(question)


@router.put("/{question_id}")
def update_question(
    question_id: int,
    payload: QuestionCreate,
    questions: QuestionRepository,
    tests: TestRepository,
) -> dict[str, object]:
    """Replace existing question."""
    require_question(questions, question_id)
    require_test(tests, payload.testId)
    question = questions.update(question_id, **_question_values(payload))
    return serialize_question(question)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(question_id: int, questions: QuestionRepository) -> Response:
    """Delete question."""
    require_question(questions, question_id)
    questions.delete(question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
