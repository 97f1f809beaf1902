"""Exam session endpoints: start, answer, lifeline, submit, end."""

from fastapi import APIRouter, Response, status

from compass.core.app_exceptions import raise_empty_question_set, raise_not_found, raise_not_owner
from compass.core.dependencies import Exams, Questions, Registry, UserId
from compass.schemas.question import QuestionOut, QuestionPublicOut
from compass.schemas.session import (
    AnswerSubmit,
    LifelineOut,
    MockExamSubmit,
    SessionCreate,
    SessionMode,
    SessionQuestionsOut,
    SessionStateOut,
)
from compass.services.session_registry import RegisteredSession, SessionRegistry

router = APIRouter()


# ============================================================================
# Helper Functions
# ============================================================================


def get_user_session(registry: SessionRegistry, session_id: str, user_id: str) -> RegisteredSession:
    """Get session and verify ownership."""
    entry = registry.get(session_id)
    if entry is None:
        raise_not_found("Session", session_id)
    if entry.user_id != user_id:
        raise_not_owner("Session belongs to another user")
    return entry


def state_out(entry: RegisteredSession) -> SessionStateOut:
    return SessionStateOut(
        session_id=entry.session_id,
        state=entry.session.snapshot(),
        notifications=entry.session.drain_notifications(),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post("", response_model=SessionStateOut, status_code=status.HTTP_201_CREATED)
async def create_session(
    payload: SessionCreate,
    user_id: UserId,
    registry: Registry,
    exams: Exams,
    questions: Questions,
) -> SessionStateOut:
    """
    Start a new session for the caller, replacing any session they had.

    Mock sessions may run a saved exam's questions (and time limit) via
    ``exam_id``.
    """
    custom_questions: list[QuestionOut] | None = None
    duration_seconds: int | None = None

    if payload.mode == SessionMode.MOCK and payload.exam_id:
        exam = exams.get(payload.exam_id)
        if exam is None:
            raise_not_found("Exam", payload.exam_id)
        custom_questions = questions.resolve_ids(exam.question_ids)
        if not custom_questions:
            raise_empty_question_set("Exam", exam.id, len(exam.question_ids))
        if exam.duration_minutes:
            duration_seconds = exam.duration_minutes * 60

    entry = registry.start(
        user_id,
        payload.mode,
        subject=payload.subject,
        set_number=payload.set_number,
        custom_questions=custom_questions,
        duration_seconds=duration_seconds,
    )
    return state_out(entry)


@router.get("/{session_id}", response_model=SessionStateOut)
async def get_session(session_id: str, user_id: UserId, registry: Registry) -> SessionStateOut:
    """Current state plus notifications raised since the last read."""
    return state_out(get_user_session(registry, session_id, user_id))


@router.get("/{session_id}/questions", response_model=SessionQuestionsOut)
async def get_session_questions(
    session_id: str, user_id: UserId, registry: Registry
) -> SessionQuestionsOut:
    """All questions of the session, without answers, for any-order answering."""
    entry = get_user_session(registry, session_id, user_id)
    return SessionQuestionsOut(
        session_id=entry.session_id,
        questions=[QuestionPublicOut.model_validate(q.model_dump()) for q in entry.session.questions],
    )


@router.post("/{session_id}/answer", response_model=SessionStateOut)
async def submit_answer(
    session_id: str, payload: AnswerSubmit, user_id: UserId, registry: Registry
) -> SessionStateOut:
    entry = get_user_session(registry, session_id, user_id)
    entry.session.submit_answer(payload.option_index)
    if not entry.session.active:
        entry.timer.cancel()
    return state_out(entry)


@router.post("/{session_id}/lifeline", response_model=LifelineOut)
async def use_lifeline(session_id: str, user_id: UserId, registry: Registry) -> LifelineOut:
    entry = get_user_session(registry, session_id, user_id)
    used = entry.session.use_lifeline()
    return LifelineOut(used=used, visible_options=entry.session.visible_options if used else None)


@router.post("/{session_id}/submit", response_model=SessionStateOut)
async def submit_mock_exam(
    session_id: str, payload: MockExamSubmit, user_id: UserId, registry: Registry
) -> SessionStateOut:
    """Grade a mock exam answered in any order."""
    entry = get_user_session(registry, session_id, user_id)
    entry.session.submit_mock_exam(payload.answers)
    entry.timer.cancel()
    return state_out(entry)


@router.post("/{session_id}/end", response_model=SessionStateOut)
async def end_session(session_id: str, user_id: UserId, registry: Registry) -> SessionStateOut:
    entry = get_user_session(registry, session_id, user_id)
    entry.timer.cancel()
    entry.session.end_game()
    return state_out(entry)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, user_id: UserId, registry: Registry) -> Response:
    get_user_session(registry, session_id, user_id)
    registry.remove(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
