"""Saved exam definitions."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from compass.models.exam import Exam
from compass.schemas.exam import ExamCreate, ExamUpdate


class ExamStore:
    def __init__(self, db: Session):
        self.db = db

    def list_exams(self) -> list[Exam]:
        return list(self.db.execute(select(Exam).order_by(Exam.created_at, Exam.id)).scalars().all())

    def get(self, exam_id: str) -> Exam | None:
        return self.db.get(Exam, exam_id)

    def create(self, payload: ExamCreate) -> Exam:
        exam = Exam(
            title=payload.title,
            question_ids=list(payload.question_ids),
            duration_minutes=payload.duration_minutes,
        )
        self.db.add(exam)
        self.db.commit()
        self.db.refresh(exam)
        return exam

    def update(self, exam_id: str, patch: ExamUpdate) -> Exam | None:
        exam = self.get(exam_id)
        if exam is None:
            return None

        for field, value in patch.model_dump(exclude_unset=True).items():
            if value is None and field != "duration_minutes":
                continue
            setattr(exam, field, value)

        self.db.commit()
        self.db.refresh(exam)
        return exam

    def delete(self, exam_id: str) -> bool:
        exam = self.get(exam_id)
        if exam is None:
            return False
        self.db.delete(exam)
        self.db.commit()
        return True
