"""In-memory ownership of live exam sessions, one per user."""

import random
import uuid
from dataclasses import dataclass
from typing import Callable, Sequence

from sqlalchemy.orm import Session

from compass.core.logging import get_logger
from compass.models.question import Subject
from compass.schemas.question import QuestionOut
from compass.schemas.session import SessionMode
from compass.services.question_store import ScopedQuestionSource
from compass.services.session_engine import ExamSession, QuestionSource, ScoreSink
from compass.services.session_timer import SessionTimer
from compass.services.user_store import ScopedScoreSink

logger = get_logger(__name__)


@dataclass
class RegisteredSession:
    session_id: str
    user_id: str
    session: ExamSession
    timer: SessionTimer


class SessionRegistry:
    """
    Maps session ids to live ``ExamSession`` instances.

    All access happens on the event loop thread.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        rng_factory: Callable[[], random.Random] | None = None,
        timer_interval: float = 1.0,
    ):
        self.session_factory = session_factory
        self.rng_factory = rng_factory
        self.timer_interval = timer_interval
        self._sessions: dict[str, RegisteredSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def source(self) -> QuestionSource:
        return ScopedQuestionSource(self.session_factory)

    def scores(self) -> ScoreSink:
        return ScopedScoreSink(self.session_factory)

    def create(self, user_id: str) -> RegisteredSession:
        """New idle session for ``user_id``; any previous one is ended and dropped."""
        self.remove_for_user(user_id, end=True)

        session = ExamSession(
            source=self.source(),
            scores=self.scores(),
            user_id=user_id,
            rng=self.rng_factory() if self.rng_factory else None,
        )
        entry = RegisteredSession(
            session_id=str(uuid.uuid4()),
            user_id=user_id,
            session=session,
            timer=SessionTimer(session, interval=self.timer_interval),
        )
        self._sessions[entry.session_id] = entry
        logger.info(
            "Session registered",
            extra={"session_id": entry.session_id, "user_id": user_id},
        )
        return entry

    def start(
        self,
        user_id: str,
        mode: SessionMode,
        subject: Subject | None = None,
        set_number: int | None = None,
        custom_questions: Sequence[QuestionOut] | None = None,
        duration_seconds: int | None = None,
    ) -> RegisteredSession:
        """Create a session, start the game and, for timed sessions, the timer."""
        entry = self.create(user_id)
        entry.session.start_game(
            mode,
            subject=subject,
            set_number=set_number,
            custom_questions=custom_questions,
            duration_seconds=duration_seconds,
        )
        entry.timer.start()
        return entry

    def get(self, session_id: str) -> RegisteredSession | None:
        return self._sessions.get(session_id)

    def for_user(self, user_id: str) -> list[RegisteredSession]:
        return [entry for entry in self._sessions.values() if entry.user_id == user_id]

    def remove(self, session_id: str) -> bool:
        """Discard a session without recording a result."""
        entry = self._sessions.pop(session_id, None)
        if entry is None:
            return False
        entry.timer.cancel()
        entry.session.reset()
        return True

    def remove_for_user(self, user_id: str, end: bool = False) -> int:
        """
        Drop every session of ``user_id``.

        With ``end=True`` an active session is ended first so its result is
        recorded; otherwise it is discarded (logout).
        """
        entries = self.for_user(user_id)
        for entry in entries:
            entry.timer.cancel()
            if end:
                entry.session.end_game()
            else:
                entry.session.reset()
            del self._sessions[entry.session_id]
        if entries:
            logger.info(
                "Sessions removed",
                extra={"user_id": user_id, "count": len(entries), "ended": end},
            )
        return len(entries)

    def close(self) -> None:
        """Cancel every timer (application shutdown)."""
        for entry in self._sessions.values():
            entry.timer.cancel()
        self._sessions.clear()
