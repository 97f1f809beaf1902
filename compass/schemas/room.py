"""Pydantic schemas for mock board rooms."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RoomCreate(BaseModel):
    """Request to create a room."""

    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    question_ids: list[str] = Field(..., description="Ordered question IDs")


class RoomUpdate(BaseModel):
    """Partial room update. At least one field is required."""

    name: str | None = Field(None, min_length=1)
    password: str | None = Field(None, min_length=1)
    question_ids: list[str] | None = None


class RoomOut(BaseModel):
    """Room response (password is never returned)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    question_ids: list[str]
    created_at: datetime | None = None


class RoomVerify(BaseModel):
    """Password check for a room."""

    password: str


class RoomVerifyResult(BaseModel):
    valid: bool


class RoomJoin(BaseModel):
    """Join a room by name and start a mock session with its questions."""

    name: str = Field(..., min_length=1)
    password: str
