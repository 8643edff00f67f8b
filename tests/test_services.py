import asyncio

import pytest
from fastapi import HTTPException
from sqlalchemy.orm import Session as DbSession

from api.models.db import Category, Question, QuizTest
from api.repositories import SqlRepository
from api.services import seed_service
from api.services.session_service import SessionRegistry
from api.services.test_service import load_question_set, require_test
from core.errors import QuestionSetEmptyError
from factories import make_question_set


def test_repository_crud(db: DbSession) -> None:
    categories = SqlRepository(db, Category)
    first = categories.create(name="History", description="Past events")
    second = categories.create(name="Sports", description="Games")
    assert second.id > first.id

    assert categories.get(first.id).name == "History"
    assert [c.name for c in categories.list()] == ["History", "Sports"]

    updated = categories.update(first.id, name="World History")
    assert updated.name == "World History"
    assert categories.update(999, name="Missing") is None

    assert categories.delete(second.id) is True
    assert categories.delete(second.id) is False
    assert categories.get(second.id) is None


def test_repository_list_ignores_none_filters(db: DbSession) -> None:
    category = SqlRepository(db, Category).create(name="Science", description="Lab")
    tests = SqlRepository(db, QuizTest)
    tests.create(name="Physics", category_id=category.id)
    tests.create(name="Biology", category_id=category.id, time_limit=5)

    assert len(tests.list(category_id=None)) == 2
    assert len(tests.list(category_id=category.id)) == 2
    assert tests.list(category_id=category.id + 1) == []


def test_load_question_set_keeps_order_and_time_limit(db: DbSession) -> None:
    category = SqlRepository(db, Category).create(name="Science", description="Lab")
    tests = SqlRepository(db, QuizTest)
    questions = SqlRepository(db, Question)
    test = tests.create(name="Physics", category_id=category.id, time_limit=12)
    for number in range(3):
        questions.create(
            test_id=test.id,
            text=f"Q{number}",
            options=["a", "b", "c", "d"],
            correct_option=number,
        )

    question_set = load_question_set(tests, questions, test.id)

    assert question_set.test_name == "Physics"
    assert question_set.time_limit == 12
    assert [q.text for q in question_set.questions] == ["Q0", "Q1", "Q2"]
    assert question_set.questions[1].options == ("a", "b", "c", "d")
    assert question_set.questions[2].correct_option == 2


def test_load_question_set_for_missing_test(db: DbSession) -> None:
    tests = SqlRepository(db, QuizTest)
    with pytest.raises(HTTPException) as exc_info:
        load_question_set(tests, SqlRepository(db, Question), 404)
    assert exc_info.value.status_code == 404
    with pytest.raises(HTTPException):
        require_test(tests, 404)


def test_seed_sample_data_only_once(db: DbSession) -> None:
    assert seed_service.seed_sample_data(db) is True
    assert seed_service.seed_sample_data(db) is False

    categories = SqlRepository(db, Category).list()
    tests = SqlRepository(db, QuizTest).list()
    questions = SqlRepository(db, Question).list(test_id=tests[0].id)
    assert len(categories) == len(seed_service.SAMPLE_CATEGORIES)
    assert len(tests) == len(seed_service.SAMPLE_TESTS)
    assert tests[0].time_limit == 15
    assert [q.correct_option for q in questions] == [1, 2, 1]
    assert all(len(q.options) == 4 for q in questions)


def test_registry_rejects_empty_question_set() -> None:
    registry = SessionRegistry()
    with pytest.raises(QuestionSetEmptyError):
        registry.create(make_question_set(()))
    assert len(registry) == 0


def test_registry_discard_and_close_all() -> None:
    async def scenario() -> tuple[SessionRegistry, list]:
        registry = SessionRegistry()
        sessions = [
            registry.create(make_question_set(time_limit=1), client_id=f"c{n}")[1]
            for n in range(3)
        ]
        first_id = next(iter(registry._sessions))
        assert registry.discard(first_id) is True
        assert registry.discard(first_id) is False
        registry.close_all()
        return registry, sessions

    registry, sessions = asyncio.run(scenario())
    assert len(registry) == 0
    assert all(not session.timer.is_running for session in sessions)


def test_registry_get_unknown_session() -> None:
    with pytest.raises(HTTPException) as exc_info:
        SessionRegistry().get("missing")
    assert exc_info.value.status_code == 404


def _finish(session) -> None:
    while not session.is_completed:
        session.select_option(0)
        session.advance()


def test_completed_sessions_are_swept_after_ttl() -> None:
    now = [1000.0]
    registry = SessionRegistry(completed_ttl=60, idle_ttl=3600, clock=lambda: now[0])

    for _ in range(100):
        _, session = registry.create(make_question_set())
        _finish(session)
    live_id, _ = registry.create(make_question_set())
    assert len(registry) == 101

    now[0] += 30
    assert registry.sweep() == 0
    assert len(registry) == 101

    now[0] += 30
    registry.get(live_id)
    assert len(registry) == 1
    assert live_id in registry


def test_idle_sessions_are_swept_unless_touched() -> None:
    now = [0.0]
    registry = SessionRegistry(completed_ttl=60, idle_ttl=600, clock=lambda: now[0])
    idle_id, _ = registry.create(make_question_set(), client_id="idle")
    busy_id, _ = registry.create(make_question_set(), client_id="busy")

    now[0] = 500.0
    registry.get(busy_id)
    now[0] = 700.0
    assert registry.sweep() == 1

    assert idle_id not in registry
    assert busy_id in registry
    with pytest.raises(HTTPException):
        registry.get(idle_id)


def test_running_timer_keeps_idle_session_alive() -> None:
    now = [0.0]

    async def scenario() -> tuple[int, bool]:
        registry = SessionRegistry(idle_ttl=10, clock=lambda: now[0])
        session_id, _ = registry.create(make_question_set(time_limit=30))
        now[0] = 100.0
        swept = registry.sweep()
        alive = session_id in registry
        registry.close_all()
        return swept, alive

    swept, alive = asyncio.run(scenario())
    assert swept == 0
    assert alive
