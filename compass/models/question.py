"""Question bank models."""

import uuid
from enum import Enum as PyEnum

from sqlalchemy import Column, DateTime, Index, Integer, JSON, String, Text
from sqlalchemy.sql import func

from compass.db.base import Base


class Subject(str, PyEnum):
    """Licensure exam subject areas."""

    LIBRARY_ORGANIZATION = "Library Organization and Management"
    REFERENCE_SERVICES = "Reference, Bibliography and User Services"
    CATALOGING = "Cataloging and Classification"
    INDEXING = "Indexing and Abstracting"
    SELECTION = "Selection and Acquisition"
    INFORMATION_TECHNOLOGY = "Information Technology"


class QuestionCategory(str, PyEnum):
    """Which pool a stored question belongs to."""

    STANDARD = "standard"
    MOCKBOARD = "mockboard"


def _new_id() -> str:
    return str(uuid.uuid4())


class Question(Base):
    """Question in the main bank."""

    __tablename__ = "questions"

    id = Column(String(36), primary_key=True, default=_new_id)
    text = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)  # List of 4 strings
    correct_answer = Column(Integer, nullable=False)  # 0-3
    subject = Column(String(100), nullable=False)
    set_number = Column("set", Integer, nullable=True)  # 1-3
    category = Column(String(20), nullable=False, default=QuestionCategory.STANDARD.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    __table_args__ = (
        Index("ix_questions_subject_set", "subject", "set"),
        Index("ix_questions_category", "category"),
    )


class MockboardQuestion(Base):
    """Imported mock board question (kept in import order)."""

    __tablename__ = "mockboard_questions"

    id = Column(String(36), primary_key=True, default=_new_id)
    position = Column(Integer, nullable=False)  # Import order
    text = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)
    correct_answer = Column(Integer, nullable=False)
    subject = Column(String(100), nullable=False)
    set_number = Column("set", Integer, nullable=True)
    imported_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (Index("ix_mockboard_questions_position", "position"),)
