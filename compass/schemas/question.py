"""Pydantic schemas for the question bank."""

from pydantic import BaseModel, ConfigDict, Field

from compass.models.question import QuestionCategory, Subject


class QuestionCreate(BaseModel):
    """Request to create a question."""

    text: str = Field(..., min_length=1, description="Question stem")
    options: list[str] = Field(..., min_length=4, max_length=4, description="Exactly 4 options")
    correct_answer: int = Field(0, ge=0, le=3, description="Index of the correct option")
    subject: Subject = Field(..., description="Subject area")
    set_number: int | None = Field(1, ge=1, le=3, description="Practice set (1-3)")
    category: QuestionCategory = Field(QuestionCategory.STANDARD, description="Target pool")


class QuestionUpdate(BaseModel):
    """Partial question update. Only fields that are sent are applied."""

    text: str | None = Field(None, min_length=1)
    options: list[str] | None = Field(None, min_length=4, max_length=4)
    correct_answer: int | None = Field(None, ge=0, le=3)
    subject: Subject | None = None
    set_number: int | None = Field(None, ge=1, le=3)


class QuestionOut(BaseModel):
    """Stored question as read by clients and the session engine."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    text: str
    options: list[str]
    correct_answer: int
    subject: Subject
    set_number: int | None = None
    category: QuestionCategory = QuestionCategory.STANDARD


class QuestionPublicOut(BaseModel):
    """Question content shown during a session (no answer key)."""

    id: str
    text: str
    options: list[str]
    subject: Subject
    set_number: int | None = None


class QuestionBatchRequest(BaseModel):
    """Fetch a slice of an explicit id list."""

    ids: list[str] = Field(..., description="Question IDs in desired order")
    batch_size: int = Field(100, ge=1, le=1000)
    offset: int = Field(0, ge=0)


class RoomQuestionsRequest(BaseModel):
    """Fetch a slice of a room's questions."""

    room_id: str
    batch_size: int = Field(100, ge=1, le=1000)
    offset: int = Field(0, ge=0)


class QuestionBatchOut(BaseModel):
    """One page of a batched question fetch."""

    questions: list[QuestionOut]
    has_more: bool
    total: int
    offset: int  # Offset to request next


class QuestionImport(BaseModel):
    """Bulk import payload."""

    questions: list[QuestionCreate] = Field(..., min_length=1)


class QuestionImportResult(BaseModel):
    """Bulk import outcome."""

    count: int
    questions: list[QuestionOut]


class MockboardClearResult(BaseModel):
    """Result of clearing the mock board pool."""

    deleted_count: int

