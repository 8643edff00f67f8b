"""Service layer for live quiz sessions held in memory."""
import logging
import time
import uuid
from typing import Callable

from fastapi import HTTPException

from api.config import (
    SESSION_COMPLETED_TTL_SECONDS,
    SESSION_IDLE_TTL_SECONDS,
    SESSION_TICK_SECONDS,
)
from core.models import QuestionSet, SessionPhase
from core.session import QuizSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Live sessions by id.

    All methods must be called from the event loop thread that runs the
    session timers. A client holds at most one session: loading a new test
    tears the previous one down.

    Stale sessions are swept whenever a session is created or looked up.
    Completed sessions stay readable for ``completed_ttl`` seconds; sessions
    nobody has touched for ``idle_ttl`` seconds are dropped unless their
    timer is still running.
    """

    def __init__(
        self,
        tick_interval: float = SESSION_TICK_SECONDS,
        completed_ttl: float = SESSION_COMPLETED_TTL_SECONDS,
        idle_ttl: float = SESSION_IDLE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.tick_interval = tick_interval
        self.completed_ttl = completed_ttl
        self.idle_ttl = idle_ttl
        self._clock = clock
        self._sessions: dict[str, QuizSession] = {}
        self._client_sessions: dict[str, str] = {}
        self._last_seen: dict[str, float] = {}
        self._completed_at: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(
        self, question_set: QuestionSet, client_id: str | None = None
    ) -> tuple[str, QuizSession]:
        """Build and start a session; raises QuestionSetEmptyError when empty."""
        session = QuizSession(question_set, tick_interval=self.tick_interval)
        self.sweep()

        if client_id:
            previous_id = self._client_sessions.get(client_id)
            if previous_id is not None:
                logger.info(f"Replacing session {previous_id} for client {client_id}")
                self.discard(previous_id)

        session_id = uuid.uuid4().hex
        session.on_phase_change(self._phase_listener(session_id))
        session.start()
        self._sessions[session_id] = session
        self._last_seen[session_id] = self._clock()
        if client_id:
            self._client_sessions[client_id] = session_id

        logger.info(
            f"Session {session_id} started for test {question_set.test_id} "
            f"({len(question_set.questions)} questions, "
            f"time limit {question_set.time_limit})"
        )
        return session_id, session

    def get(self, session_id: str) -> QuizSession:
        """Get live session or fail with 404."""
        self.sweep()
        session = self._sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Session not found")
        self._last_seen[session_id] = self._clock()
        return session

    def discard(self, session_id: str) -> bool:
        """Tear down a session and cancel its timer."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        session.close()
        self._last_seen.pop(session_id, None)
        self._completed_at.pop(session_id, None)
        for client_id, owned_id in list(self._client_sessions.items()):
            if owned_id == session_id:
                del self._client_sessions[client_id]
        logger.info(f"Session {session_id} discarded")
        return True

    def sweep(self) -> int:
        """Discard completed and idle sessions past their TTL."""
        now = self._clock()
        stale = [
            session_id
            for session_id, session in self._sessions.items()
            if self._is_stale(session_id, session, now)
        ]
        for session_id in stale:
            self.discard(session_id)
        if stale:
            logger.info(f"Swept {len(stale)} stale session(s), {len(self)} live")
        return len(stale)

    def close_all(self) -> None:
        """Tear down every live session (application shutdown)."""
        for session_id in list(self._sessions):
            self.discard(session_id)

    def _is_stale(self, session_id: str, session: QuizSession, now: float) -> bool:
        completed_at = self._completed_at.get(session_id)
        if completed_at is not None:
            return now - completed_at >= self.completed_ttl
        if session.timer.is_running:
            return False
        return now - self._last_seen.get(session_id, now) >= self.idle_ttl

    def _phase_listener(self, session_id: str):
        def _on_phase(phase: SessionPhase, session: QuizSession) -> None:
            if phase == SessionPhase.COMPLETED:
                self._completed_at[session_id] = self._clock()
            logger.info(
                f"Session {session_id} entered {phase.value} "
                f"with score {session.score}/{len(session.questions)}"
            )

        return _on_phase


registry = SessionRegistry()


def get_session_registry() -> SessionRegistry:
    """Dependency to get the process-wide session registry."""
    return registry
