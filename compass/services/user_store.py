"""User profiles, login and score history."""

from typing import Callable

from sqlalchemy import select
from sqlalchemy.orm import Session

from compass.core.config import settings
from compass.core.logging import get_logger
from compass.db.session import session_scope
from compass.models.user import UserProfile, UserRole

logger = get_logger(__name__)


class AuthError(Exception):
    """Login rejected."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class UserStore:
    """Profile persistence. Also receives session results from the engine."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> UserProfile | None:
        return self.db.get(UserProfile, user_id)

    def login(self, username: str, password: str | None, role: UserRole) -> UserProfile:
        """
        Fetch or create the profile for ``username`` under ``role``.

        Admins must present the configured passcode. Students and librarians
        are accepted by name alone.

        Raises:
            AuthError: Wrong admin passcode
        """
        if role == UserRole.ADMIN and password != settings.ADMIN_PASSCODE:
            logger.warning("Admin login rejected", extra={"username": username})
            raise AuthError("Invalid admin password")

        stmt = select(UserProfile).where(
            UserProfile.name == username, UserProfile.role == role.value
        )
        profile = self.db.execute(stmt).scalars().first()
        if profile is None:
            profile = UserProfile(
                name=username,
                role=role.value,
                lives=settings.STANDARD_LIVES,
                mock_board_score=None,
                standard_game_scores=[],
            )
            self.db.add(profile)
            self.db.commit()
            self.db.refresh(profile)
            logger.info("Profile created", extra={"user_id": profile.id, "role": role.value})

        return profile

    def record_mock_score(self, user_id: str, score: float) -> UserProfile | None:
        profile = self.get(user_id)
        if profile is None:
            return None
        profile.mock_board_score = score
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def record_standard_score(self, user_id: str, score: int) -> UserProfile | None:
        profile = self.get(user_id)
        if profile is None:
            return None
        # Reassign so the JSON column change is tracked
        profile.standard_game_scores = [*(profile.standard_game_scores or []), score]
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def reset_stats(self, user_id: str) -> UserProfile | None:
        profile = self.get(user_id)
        if profile is None:
            return None
        profile.lives = settings.STANDARD_LIVES
        profile.mock_board_score = None
        profile.standard_game_scores = []
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def leaderboard(self, limit: int = 10) -> list[UserProfile]:
        """Non-admin profiles with a mock board score, best first."""
        stmt = (
            select(UserProfile)
            .where(
                UserProfile.role != UserRole.ADMIN.value,
                UserProfile.mock_board_score.is_not(None),
            )
            .order_by(UserProfile.mock_board_score.desc(), UserProfile.name)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())


class ScopedScoreSink:
    """Score sink for long-lived sessions: one short DB session per call."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def record_mock_score(self, user_id: str, score: float) -> None:
        with session_scope(self.session_factory) as db:
            UserStore(db).record_mock_score(user_id, score)

    def record_standard_score(self, user_id: str, score: int) -> None:
        with session_scope(self.session_factory) as db:
            UserStore(db).record_standard_score(user_id, score)
