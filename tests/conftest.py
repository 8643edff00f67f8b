import os
import tempfile

# Keep the application's default database out of the working tree
os.environ.setdefault("DB_DIR", tempfile.mkdtemp(prefix="quiz_test_db_"))
os.environ["SEED_SAMPLE_DATA"] = "0"

import asyncio  # noqa: E402
from pathlib import Path  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from api.app import app  # noqa: E402
from api.database import get_db, init_db  # noqa: E402
from api.services.session_service import SessionRegistry, get_session_registry  # noqa: E402


@pytest.fixture
def loop():
    """An event loop that is never run; timers only schedule on it."""
    event_loop = asyncio.new_event_loop()
    yield event_loop
    event_loop.close()


@pytest.fixture
def session_factory(tmp_path: Path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'quiz.db'}",
        connect_args={"check_same_thread": False},
    )
    init_db(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def client(session_factory, registry: SessionRegistry):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    registry.close_all()
