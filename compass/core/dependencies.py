"""FastAPI dependencies for identity, stores and the session registry."""

from typing import Annotated

from fastapi import Depends, Header, Request, status
from sqlalchemy.orm import Session

from compass.core.app_exceptions import AppError
from compass.db.session import get_db
from compass.services.exam_store import ExamStore
from compass.services.question_store import QuestionStore
from compass.services.room_store import RoomStore
from compass.services.session_registry import SessionRegistry
from compass.services.user_store import UserStore

DbSession = Annotated[Session, Depends(get_db)]


def get_user_id(x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None) -> str:
    """Caller identity from the X-User-Id header (no real authentication)."""
    if not x_user_id:
        raise AppError(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="UNAUTHORIZED",
            message="X-User-Id header required",
        )
    return x_user_id


def get_registry(request: Request) -> SessionRegistry:
    """Application-wide session registry."""
    return request.app.state.registry


def get_question_store(db: DbSession) -> QuestionStore:
    return QuestionStore(db)


def get_exam_store(db: DbSession) -> ExamStore:
    return ExamStore(db)


def get_room_store(db: DbSession) -> RoomStore:
    return RoomStore(db)


def get_user_store(db: DbSession) -> UserStore:
    return UserStore(db)


UserId = Annotated[str, Depends(get_user_id)]
Registry = Annotated[SessionRegistry, Depends(get_registry)]
Questions = Annotated[QuestionStore, Depends(get_question_store)]
Exams = Annotated[ExamStore, Depends(get_exam_store)]
Rooms = Annotated[RoomStore, Depends(get_room_store)]
Users = Annotated[UserStore, Depends(get_user_store)]
