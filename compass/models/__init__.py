"""Database models."""

# Import all models here so Alembic and create_all can detect them
from compass.models.exam import Exam
from compass.models.question import MockboardQuestion, Question, QuestionCategory, Subject
from compass.models.room import Room
from compass.models.user import UserProfile, UserRole

__all__ = [
    "Exam",
    "MockboardQuestion",
    "Question",
    "QuestionCategory",
    "Subject",
    "Room",
    "UserProfile",
    "UserRole",
]
