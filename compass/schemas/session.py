"""Pydantic schemas for exam sessions."""

from enum import Enum

from pydantic import BaseModel, Field

from compass.models.question import Subject
from compass.schemas.question import QuestionPublicOut


class SessionMode(str, Enum):
    """Exam session mode."""

    STANDARD = "standard"
    MOCK = "mock"


class SessionStatus(str, Enum):
    """Exam session lifecycle state."""

    IDLE = "idle"
    ACTIVE = "active"
    ENDED = "ended"


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """User-facing, non-fatal message raised by the session engine."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT


class MockResult(BaseModel):
    """Final mock board report."""

    score: float = Field(..., description="Weighted percentage used for pass/fail")
    overall_percentage: float = Field(..., description="Unweighted correct / total x 100")
    passed: bool
    details: dict[str, float] = Field(default_factory=dict, description="Accuracy per subject")
    correct: int
    total: int


# ============================================================================
# Requests
# ============================================================================


class SessionCreate(BaseModel):
    """Request to start a session."""

    mode: SessionMode = Field(..., description="standard or mock")
    subject: Subject | None = Field(None, description="Standard mode subject filter")
    set_number: int | None = Field(None, ge=1, le=3, description="Standard mode set filter")
    exam_id: str | None = Field(None, description="Mock mode: run a saved exam's questions")


class AnswerSubmit(BaseModel):
    """Answer the current question."""

    option_index: int = Field(..., ge=0, description="Chosen option index")


class MockExamSubmit(BaseModel):
    """Submit every mock answer at once, keyed by question position."""

    answers: dict[int, int] = Field(default_factory=dict)


# ============================================================================
# Responses
# ============================================================================


class SessionSnapshot(BaseModel):
    """Read-only view of the engine for the presentation layer."""

    mode: SessionMode | None
    status: SessionStatus
    active: bool
    score: int
    lives: int
    current_index: int
    total_questions: int
    time_remaining_seconds: int
    consecutive_correct: int
    lifeline_active: bool
    lifeline_available: bool
    per_question_result: dict[int, bool]
    current_question: QuestionPublicOut | None = None
    visible_options: list[int] | None = None
    mock_results: MockResult | None = None


class SessionStateOut(BaseModel):
    """Session state plus any notifications raised since the last read."""

    session_id: str
    state: SessionSnapshot
    notifications: list[Notification] = Field(default_factory=list)


class SessionQuestionsOut(BaseModel):
    """Every question of the session, for any-order mock answering."""

    session_id: str
    questions: list[QuestionPublicOut]


class LifelineOut(BaseModel):
    used: bool
    visible_options: list[int] | None = None
