"""User profile model."""

import uuid
from enum import Enum

from sqlalchemy import Column, DateTime, Float, Integer, JSON, String
from sqlalchemy.sql import func

from compass.db.base import Base


class UserRole(str, Enum):
    """User role enum."""

    STUDENT = "student"
    LIBRARIAN = "librarian"
    ADMIN = "admin"


class UserProfile(Base):
    """Logged-in user's profile and score history."""

    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    role = Column(String(20), nullable=False, default=UserRole.STUDENT.value)
    lives = Column(Integer, nullable=False, default=10)
    mock_board_score = Column(Float, nullable=True)  # Last weighted mock percentage
    standard_game_scores = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
