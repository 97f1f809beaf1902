"""Saved exam definitions."""

import uuid

from sqlalchemy import Column, DateTime, Integer, JSON, String, Text
from sqlalchemy.sql import func

from compass.db.base import Base


class Exam(Base):
    """Named, ordered list of question ids with an optional time limit."""

    __tablename__ = "exams"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(Text, nullable=False)
    question_ids = Column(JSON, nullable=False)  # ["<question id>", ...]
    duration_minutes = Column(Integer, nullable=True)  # null = untimed
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
