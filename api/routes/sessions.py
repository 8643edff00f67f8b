"""
Quiz session endpoints.

These handlers are async so that session events run on the event loop
thread, the same thread that fires timer ticks. Loading questions from the
database happens in a sync dependency, which FastAPI runs in its thread pool.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from api.models import OptionSelectRequest, SessionCreateRequest
from api.repositories import QuestionRepository, TestRepository
from api.services.session_service import SessionRegistry, get_session_registry
from api.services.test_service import load_question_set
from core.models import QuestionSet
from serialization import serialize_snapshot

router = APIRouter(prefix="/api", tags=["sessions"])

Registry = Annotated[SessionRegistry, Depends(get_session_registry)]


def get_question_set(
    test_id: int,
    tests: TestRepository,
    questions: QuestionRepository,
) -> QuestionSet:
    """Dependency to load the question set of the test in the path."""
    return load_question_set(tests, questions, test_id)


@router.post("/tests/{test_id}/sessions", status_code=status.HTTP_201_CREATED)
async def start_session(
    question_set: Annotated[QuestionSet, Depends(get_question_set)],
    registry: Registry,
    payload: SessionCreateRequest | None = None,
) -> dict[str, object]:
    """Start a session on a test, replacing the client's previous one."""
    client_id = payload.clientId if payload else None
    session_id, session = registry.create(question_set, client_id=client_id)
    return serialize_snapshot(session_id, session.snapshot())


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, registry: Registry) -> dict[str, object]:
    """Get current session state."""
    session = registry.get(session_id)
    return serialize_snapshot(session_id, session.snapshot())


@router.post("/sessions/{session_id}/select")
async def select_option(
    session_id: str,
    payload: OptionSelectRequest,
    registry: Registry,
) -> dict[str, object]:
    """Choose an option for the current question."""
    session = registry.get(session_id)
    session.select_option(payload.option)
    return serialize_snapshot(session_id, session.snapshot())


@router.post("/sessions/{session_id}/advance")
async def advance(session_id: str, registry: Registry) -> dict[str, object]:
    """Move to the next question, or finish after the last one."""
    session = registry.get(session_id)
    session.advance()
    return serialize_snapshot(session_id, session.snapshot())


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(session_id: str, registry: Registry) -> Response:
    """Tear the session down and stop its timer."""
    registry.get(session_id)
    registry.discard(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
