"""Question bank persistence: the main pool and the imported mock board pool."""

from typing import Callable, Sequence, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from compass.core.logging import get_logger
from compass.db.session import session_scope
from compass.models.question import MockboardQuestion, Question, QuestionCategory, Subject
from compass.schemas.question import QuestionCreate, QuestionOut, QuestionUpdate

logger = get_logger(__name__)

T = TypeVar("T")


def paginate_ids(ids: Sequence[T], offset: int, batch_size: int) -> tuple[list[T], bool, int]:
    """
    Slice one page out of an ordered id list.

    Returns:
        (batch, has_more, next_offset)
    """
    total = len(ids)
    start = max(offset, 0)
    end = min(start + batch_size, total)
    return list(ids[start:end]), end < total, end


def mockboard_to_out(row: MockboardQuestion) -> QuestionOut:
    return QuestionOut(
        id=row.id,
        text=row.text,
        options=row.options,
        correct_answer=row.correct_answer,
        subject=row.subject,
        set_number=row.set_number,
        category=QuestionCategory.MOCKBOARD,
    )


class QuestionStore:
    """SQLAlchemy-backed question store, also the engine's question source."""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Main pool
    # ------------------------------------------------------------------

    def list_questions(
        self,
        category: QuestionCategory | None = None,
        subject: Subject | None = None,
        set_number: int | None = None,
    ) -> list[Question]:
        stmt = select(Question)
        if category is not None:
            stmt = stmt.where(Question.category == category.value)
        if subject is not None:
            stmt = stmt.where(Question.subject == subject.value)
        if set_number is not None:
            stmt = stmt.where(Question.set_number == set_number)
        stmt = stmt.order_by(Question.created_at, Question.id)
        return list(self.db.execute(stmt).scalars().all())

    def get(self, question_id: str) -> Question | None:
        return self.db.get(Question, question_id)

    def get_bulk(self, ids: Sequence[str]) -> list[Question]:
        """Fetch questions in the order of ``ids``; unknown ids are skipped."""
        if not ids:
            return []
        rows = self.db.execute(select(Question).where(Question.id.in_(ids))).scalars().all()
        by_id = {row.id: row for row in rows}
        return [by_id[qid] for qid in ids if qid in by_id]

    def create(self, payload: QuestionCreate, commit: bool = True) -> Question:
        question = Question(
            text=payload.text,
            options=list(payload.options),
            correct_answer=payload.correct_answer,
            subject=payload.subject.value,
            set_number=payload.set_number,
            category=payload.category.value,
        )
        self.db.add(question)
        if commit:
            self.db.commit()
            self.db.refresh(question)
        return question

    def create_many(self, payloads: Sequence[QuestionCreate]) -> list[Question]:
        """Bulk insert into the main pool in a single transaction."""
        questions = [self.create(payload, commit=False) for payload in payloads]
        self.db.commit()
        for question in questions:
            self.db.refresh(question)
        logger.info("Questions imported", extra={"count": len(questions)})
        return questions

    def update(self, question_id: str, patch: QuestionUpdate) -> Question | None:
        """Apply only the fields present in ``patch``."""
        question = self.get(question_id)
        if question is None:
            return None

        update_data = patch.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field != "set_number":
                continue
            if field == "subject":
                value = value.value
            setattr(question, field, value)

        self.db.commit()
        self.db.refresh(question)
        return question

    def delete(self, question_id: str) -> bool:
        question = self.get(question_id)
        if question is None:
            return False
        self.db.delete(question)
        self.db.commit()
        return True

    def delete_category(self, category: QuestionCategory) -> int:
        result = self.db.execute(delete(Question).where(Question.category == category.value))
        self.db.commit()
        return result.rowcount or 0

    # ------------------------------------------------------------------
    # Mock board pool
    # ------------------------------------------------------------------

    def list_mockboard(self) -> list[MockboardQuestion]:
        """Imported mock board questions in import order."""
        stmt = select(MockboardQuestion).order_by(MockboardQuestion.position, MockboardQuestion.id)
        return list(self.db.execute(stmt).scalars().all())

    def get_bulk_mockboard(self, ids: Sequence[str]) -> list[MockboardQuestion]:
        if not ids:
            return []
        rows = (
            self.db.execute(select(MockboardQuestion).where(MockboardQuestion.id.in_(ids)))
            .scalars()
            .all()
        )
        by_id = {row.id: row for row in rows}
        return [by_id[qid] for qid in ids if qid in by_id]

    def _next_position(self) -> int:
        current = self.db.execute(select(func.max(MockboardQuestion.position))).scalar()
        return 0 if current is None else current + 1

    def create_mockboard(self, payload: QuestionCreate) -> MockboardQuestion:
        row = self._new_mockboard(payload, self._next_position())
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def import_mockboard(self, payloads: Sequence[QuestionCreate]) -> list[MockboardQuestion]:
        """Append questions to the mock board pool, preserving their order."""
        start = self._next_position()
        rows = [self._new_mockboard(payload, start + i) for i, payload in enumerate(payloads)]
        self.db.add_all(rows)
        self.db.commit()
        for row in rows:
            self.db.refresh(row)
        logger.info("Mock board questions imported", extra={"count": len(rows)})
        return rows

    def delete_mockboard(self, question_id: str) -> bool:
        row = self.db.get(MockboardQuestion, question_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.commit()
        return True

    def clear_mockboard(self) -> int:
        result = self.db.execute(delete(MockboardQuestion))
        self.db.commit()
        deleted = result.rowcount or 0
        logger.info("Mock board pool cleared", extra={"deleted_count": deleted})
        return deleted

    @staticmethod
    def _new_mockboard(payload: QuestionCreate, position: int) -> MockboardQuestion:
        return MockboardQuestion(
            position=position,
            text=payload.text,
            options=list(payload.options),
            correct_answer=payload.correct_answer,
            subject=payload.subject.value,
            set_number=payload.set_number,
        )

    # ------------------------------------------------------------------
    # Engine question source
    # ------------------------------------------------------------------

    def fetch_questions(
        self, subject: Subject | None = None, set_number: int | None = None
    ) -> list[QuestionOut]:
        rows = self.list_questions(subject=subject, set_number=set_number)
        return [QuestionOut.model_validate(row) for row in rows]

    def fetch_mockboard_questions(self) -> list[QuestionOut]:
        return [mockboard_to_out(row) for row in self.list_mockboard()]

    def add_question(self, payload: QuestionCreate) -> QuestionOut:
        return QuestionOut.model_validate(self.create(payload))

    def import_questions(self, payloads: Sequence[QuestionCreate]) -> int:
        return len(self.create_many(payloads))

    def resolve_ids(self, ids: Sequence[str]) -> list[QuestionOut]:
        """Resolve ids against both pools, keeping the order of ``ids``."""
        found: dict[str, QuestionOut] = {
            row.id: QuestionOut.model_validate(row) for row in self.get_bulk(ids)
        }
        missing = [qid for qid in ids if qid not in found]
        if missing:
            for row in self.get_bulk_mockboard(missing):
                found[row.id] = mockboard_to_out(row)
        return [found[qid] for qid in ids if qid in found]


class ScopedQuestionSource:
    """Question source for long-lived sessions: one short DB session per call."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def fetch_questions(
        self, subject: Subject | None = None, set_number: int | None = None
    ) -> list[QuestionOut]:
        with session_scope(self.session_factory) as db:
            return QuestionStore(db).fetch_questions(subject=subject, set_number=set_number)

    def fetch_mockboard_questions(self) -> list[QuestionOut]:
        with session_scope(self.session_factory) as db:
            return QuestionStore(db).fetch_mockboard_questions()

    def add_question(self, payload: QuestionCreate) -> QuestionOut:
        with session_scope(self.session_factory) as db:
            return QuestionStore(db).add_question(payload)

    def import_questions(self, payloads: Sequence[QuestionCreate]) -> int:
        with session_scope(self.session_factory) as db:
            return QuestionStore(db).import_questions(payloads)
