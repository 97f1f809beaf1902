"""Pydantic schemas for saved exams."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ExamCreate(BaseModel):
    """Request to create an exam."""

    title: str = Field(..., min_length=1)
    question_ids: list[str] = Field(..., description="Ordered question IDs")
    duration_minutes: int | None = Field(None, ge=1, description="Time limit, null = untimed")


class ExamUpdate(BaseModel):
    """Partial exam update."""

    title: str | None = Field(None, min_length=1)
    question_ids: list[str] | None = None
    duration_minutes: int | None = Field(None, ge=1)


class ExamOut(BaseModel):
    """Exam response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    question_ids: list[str]
    duration_minutes: int | None
    created_at: datetime | None = None
