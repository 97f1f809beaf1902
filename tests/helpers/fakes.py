"""In-memory collaborators for exercising the session engine without a database."""

from typing import Sequence

from compass.models.question import Subject
from compass.schemas.question import QuestionCreate, QuestionOut


def make_question(
    index: int,
    subject: Subject = Subject.CATALOGING,
    set_number: int = 1,
    correct_answer: int = 0,
) -> QuestionOut:
    return QuestionOut(
        id=f"q-{subject.name.lower()}-{index}",
        text=f"Question {index} about {subject.value}",
        options=["A", "B", "C", "D"],
        correct_answer=correct_answer,
        subject=subject,
        set_number=set_number,
    )


def make_pool(per_subject: int, subjects: Sequence[Subject] = tuple(Subject)) -> list[QuestionOut]:
    """``per_subject`` questions for each subject, sets cycling 1..3."""
    return [
        make_question(i, subject=subject, set_number=i % 3 + 1)
        for subject in subjects
        for i in range(per_subject)
    ]


class InMemorySource:
    """Question source over plain lists; can be told to fail."""

    def __init__(
        self,
        questions: Sequence[QuestionOut] = (),
        mockboard: Sequence[QuestionOut] = (),
        fail_fetch: bool = False,
        fail_writes: bool = False,
    ):
        self.questions = list(questions)
        self.mockboard = list(mockboard)
        self.fail_fetch = fail_fetch
        self.fail_writes = fail_writes
        self.fetch_calls: list[tuple[Subject | None, int | None]] = []

    def fetch_questions(self, subject=None, set_number=None) -> list[QuestionOut]:
        self.fetch_calls.append((subject, set_number))
        if self.fail_fetch:
            raise ConnectionError("question store unreachable")
        return [
            q
            for q in self.questions
            if (subject is None or q.subject == subject)
            and (set_number is None or q.set_number == set_number)
        ]

    def fetch_mockboard_questions(self) -> list[QuestionOut]:
        if self.fail_fetch:
            raise ConnectionError("question store unreachable")
        return list(self.mockboard)

    def add_question(self, payload: QuestionCreate) -> QuestionOut:
        if self.fail_writes:
            raise ConnectionError("write failed")
        question = QuestionOut(id=f"new-{len(self.questions)}", **payload.model_dump())
        self.questions.append(question)
        return question

    def import_questions(self, payloads: Sequence[QuestionCreate]) -> int:
        if self.fail_writes:
            raise ConnectionError("write failed")
        for payload in payloads:
            self.add_question(payload)
        return len(payloads)


class RecordingSink:
    """Score sink that remembers what it was sent."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.mock_scores: list[tuple[str, float]] = []
        self.standard_scores: list[tuple[str, int]] = []

    def record_mock_score(self, user_id: str, score: float) -> None:
        if self.fail:
            raise ConnectionError("profile store unreachable")
        self.mock_scores.append((user_id, score))

    def record_standard_score(self, user_id: str, score: int) -> None:
        if self.fail:
            raise ConnectionError("profile store unreachable")
        self.standard_scores.append((user_id, score))
