"""Password-protected question rooms for group mock exams."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from compass.core.config import settings
from compass.core.logging import get_logger
from compass.models.question import QuestionCategory
from compass.models.room import Room
from compass.schemas.question import QuestionOut
from compass.schemas.room import RoomCreate, RoomUpdate
from compass.services.question_store import QuestionStore

logger = get_logger(__name__)


class RoomStore:
    """Room CRUD plus resolution of a room's question list."""

    def __init__(self, db: Session):
        self.db = db

    def list_rooms(self) -> list[Room]:
        return list(self.db.execute(select(Room).order_by(Room.created_at, Room.id)).scalars().all())

    def get(self, room_id: str) -> Room | None:
        return self.db.get(Room, room_id)

    def get_by_name(self, name: str) -> Room | None:
        """Most recently created room with this name."""
        stmt = select(Room).where(Room.name == name).order_by(Room.created_at.desc()).limit(1)
        return self.db.execute(stmt).scalars().first()

    def create(self, payload: RoomCreate) -> Room:
        room = Room(
            name=payload.name,
            password=payload.password,
            question_ids=list(payload.question_ids),
        )
        self.db.add(room)
        self.db.commit()
        self.db.refresh(room)
        logger.info(
            "Room created",
            extra={"room_id": room.id, "question_count": len(room.question_ids)},
        )
        return room

    def update(self, room_id: str, patch: RoomUpdate) -> Room | None:
        room = self.get(room_id)
        if room is None:
            return None

        for field, value in patch.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(room, field, value)

        self.db.commit()
        self.db.refresh(room)
        return room

    def delete(self, room_id: str) -> bool:
        """
        Delete a room.

        A room that carried questions also takes the mockboard-category
        questions of the main pool with it.
        """
        room = self.get(room_id)
        if room is None:
            return False

        if room.question_ids:
            removed = QuestionStore(self.db).delete_category(QuestionCategory.MOCKBOARD)
            logger.info(
                "Room questions removed",
                extra={"room_id": room_id, "deleted_count": removed},
            )

        self.db.delete(room)
        self.db.commit()
        return True

    def verify_password(self, room_id: str, password: str) -> bool:
        # Plain equality, as stored
        room = self.get(room_id)
        return room is not None and room.password == password

    def resolve_room_questions(
        self, room_id: str, limit: int | None = None
    ) -> list[QuestionOut] | None:
        """
        Resolve a room's question ids to questions, in room order.

        Ids are looked up in the main pool first, then the mock board pool.
        Unknown ids are skipped. Returns None for an unknown room.
        """
        room = self.get(room_id)
        if room is None:
            return None

        cap = settings.ROOM_MAX_QUESTIONS if limit is None else min(limit, settings.ROOM_MAX_QUESTIONS)
        return QuestionStore(self.db).resolve_ids(room.question_ids[:cap])
