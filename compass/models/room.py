"""Mock board room model."""

import uuid

from sqlalchemy import Column, DateTime, JSON, String, Text
from sqlalchemy.sql import func

from compass.db.base import Base


class Room(Base):
    """Password-protected, pre-assembled question set for a group mock exam."""

    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(Text, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    question_ids = Column(JSON, nullable=False)  # Ordered
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
