"""Exam session engine: lives, streaks, lifelines, timed mock exams and scoring."""

import random
from collections import defaultdict
from typing import Any, Callable, Protocol, Sequence

from compass.core.config import settings
from compass.core.logging import get_logger
from compass.data.fallback import fallback_questions
from compass.mocks.contracts import SUBJECT_WEIGHTS, MockDistributionConfig
from compass.mocks.generator import generate_mock_questions, shuffled
from compass.models.question import Subject
from compass.schemas.question import QuestionCreate, QuestionOut, QuestionPublicOut
from compass.schemas.session import (
    MockResult,
    Notification,
    NotificationVariant,
    SessionMode,
    SessionSnapshot,
    SessionStatus,
)

logger = get_logger(__name__)

# Questions are read-only records once loaded into a session
QuestionRecord = QuestionOut


class QuestionSource(Protocol):
    """Where the engine reads question pools from and writes new questions to."""

    def fetch_questions(
        self, subject: Subject | None = None, set_number: int | None = None
    ) -> list[QuestionRecord]: ...

    def fetch_mockboard_questions(self) -> list[QuestionRecord]: ...

    def add_question(self, payload: QuestionCreate) -> QuestionRecord: ...

    def import_questions(self, payloads: Sequence[QuestionCreate]) -> int: ...


class ScoreSink(Protocol):
    """Receives final results when a session ends."""

    def record_mock_score(self, user_id: str, score: float) -> Any: ...

    def record_standard_score(self, user_id: str, score: int) -> Any: ...


def eliminate_options(question: QuestionRecord, rng: random.Random) -> list[int]:
    """
    Pick the options left visible by a 50/50 lifeline.

    Returns the correct option index and exactly one random incorrect index,
    in their original order.
    """
    incorrect = [i for i in range(len(question.options)) if i != question.correct_answer]
    if not incorrect:
        return [question.correct_answer]
    decoy = incorrect[rng.randrange(len(incorrect))]
    return sorted([question.correct_answer, decoy])


def is_passing(score: float, passing_score: float | None = None) -> bool:
    """Mock board pass mark: inclusive of the threshold."""
    threshold = settings.PASSING_SCORE if passing_score is None else passing_score
    return score >= threshold


def score_mock_exam(
    questions: Sequence[QuestionRecord],
    per_question_result: dict[int, bool],
    weights: dict[Subject, int] | None = None,
    passing_score: float | None = None,
) -> MockResult:
    """
    Compute the weighted mock board report.

    Each subject present contributes ``accuracy * weight / 100``. A configured
    subject with no questions in the session contributes nothing, so the
    weighted score under-counts in that case.
    """
    weights = SUBJECT_WEIGHTS if weights is None else weights

    totals: dict[Subject, int] = defaultdict(int)
    correct_by_subject: dict[Subject, int] = defaultdict(int)
    for position, question in enumerate(questions):
        totals[question.subject] += 1
        if per_question_result.get(position):
            correct_by_subject[question.subject] += 1

    details: dict[str, float] = {}
    weighted = 0.0
    for subject, total in totals.items():
        accuracy = (correct_by_subject[subject] / total) * 100 if total else 0.0
        details[subject.value] = accuracy
        weight = weights.get(subject)
        if weight is not None:
            weighted += (accuracy * weight) / 100

    correct = sum(1 for ok in per_question_result.values() if ok)
    total = len(questions)
    overall = (correct / total) * 100 if total else 0.0

    return MockResult(
        score=weighted,
        overall_percentage=overall,
        passed=is_passing(weighted, passing_score),
        details=details,
        correct=correct,
        total=total,
    )


class ExamSession:
    """
    One exam attempt, Standard practice or timed Mock board.

    Idle -> Active via start_game. Active -> Ended via submit_answer (lives
    exhausted or last question), submit_mock_exam, timer expiry or end_game.
    Calls that do not apply to the current state are no-ops.
    """

    def __init__(
        self,
        source: QuestionSource,
        scores: ScoreSink | None = None,
        user_id: str | None = None,
        rng: random.Random | None = None,
    ):
        self.source = source
        self.scores = scores
        self.user_id = user_id
        self.rng = rng or random.SystemRandom()

        self.mode: SessionMode | None = None
        self.status = SessionStatus.IDLE
        self.questions: list[QuestionRecord] = []
        self.current_index = 0
        self.lives = settings.STANDARD_LIVES
        self.score = 0
        self.consecutive_correct = 0
        self.lifeline_active = False
        self.visible_options: list[int] | None = None
        self.time_remaining_seconds = 0
        self.per_question_result: dict[int, bool] = {}
        self.mock_results: MockResult | None = None
        self._notifications: list[Notification] = []

    @property
    def active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def current_question(self) -> QuestionRecord | None:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def lifeline_available(self) -> bool:
        if not self.active or self.lifeline_active:
            return False
        if self.mode == SessionMode.MOCK:
            return True
        return self.consecutive_correct >= settings.LIFELINE_STREAK

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def notify(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> None:
        self._notifications.append(
            Notification(title=title, description=description, variant=variant)
        )

    def drain_notifications(self) -> list[Notification]:
        """Return and clear notifications raised since the last call."""
        pending, self._notifications = self._notifications, []
        return pending

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_game(
        self,
        mode: SessionMode,
        subject: Subject | None = None,
        set_number: int | None = None,
        custom_questions: Sequence[QuestionRecord] | None = None,
        duration_seconds: int | None = None,
    ) -> SessionSnapshot:
        """
        Reset all per-attempt state and load a question set for ``mode``.

        ``duration_seconds`` overrides the mock countdown (saved exams with a
        time limit).
        """
        self.mode = mode
        self.current_index = 0
        self.score = 0
        self.consecutive_correct = 0
        self.lifeline_active = False
        self.visible_options = None
        self.per_question_result = {}
        self.mock_results = None
        self.lives = settings.STANDARD_LIVES

        if mode == SessionMode.STANDARD:
            self.time_remaining_seconds = 0
            self.questions = self._standard_questions(subject, set_number)
        else:
            self.time_remaining_seconds = duration_seconds or settings.MOCK_DURATION_SECONDS
            self.questions = self._mock_questions(custom_questions)

        if not self.questions:
            self.status = SessionStatus.ENDED
            self.notify(
                "No Questions Available",
                "No questions match this selection.",
                NotificationVariant.DESTRUCTIVE,
            )
            logger.warning(
                "Session not started, empty question set",
                extra={"user_id": self.user_id, "mode": mode.value},
            )
            return self.snapshot()

        self.status = SessionStatus.ACTIVE
        logger.info(
            "Session started",
            extra={
                "user_id": self.user_id,
                "mode": mode.value,
                "subject": subject.value if subject else None,
                "set_number": set_number,
                "question_count": len(self.questions),
            },
        )
        return self.snapshot()

    def submit_answer(self, option_index: int) -> None:
        """Answer the current question and advance, or end the session."""
        question = self.current_question
        if not self.active or question is None:
            return
        if not 0 <= option_index < len(question.options):
            return

        is_correct = option_index == question.correct_answer
        self.per_question_result[self.current_index] = is_correct

        if is_correct:
            self.score += 1
            self.consecutive_correct += 1
            if (
                self.mode == SessionMode.STANDARD
                and self.consecutive_correct == settings.LIFELINE_STREAK
            ):
                self.notify(
                    "Lifeline Unlocked!",
                    f"You've answered {settings.LIFELINE_STREAK} correctly in a row. "
                    "50/50 is now available.",
                )
        else:
            self.consecutive_correct = 0
            if self.mode == SessionMode.STANDARD:
                self.lives -= 1
                self.notify(
                    "Wrong Answer!", "You lost a heart.", NotificationVariant.DESTRUCTIVE
                )

        has_next = self.current_index < len(self.questions) - 1
        if has_next and (self.mode == SessionMode.MOCK or self.lives > 0):
            self.current_index += 1
            self.lifeline_active = False
            self.visible_options = None
        else:
            self.end_game()

    def submit_mock_exam(self, answers: dict[int, int]) -> None:
        """Grade every question at once from ``answers`` (position -> option) and end."""
        if not self.active or self.mode != SessionMode.MOCK:
            return

        results: dict[int, bool] = {}
        for position, question in enumerate(self.questions):
            chosen = answers.get(position)
            results[position] = chosen is not None and chosen == question.correct_answer

        self.per_question_result = results
        self.score = sum(1 for ok in results.values() if ok)
        self.end_game()

    def use_lifeline(self) -> bool:
        """Activate the 50/50 lifeline on the current question if available."""
        question = self.current_question
        if question is None or not self.lifeline_available:
            return False

        if self.mode == SessionMode.STANDARD:
            self.consecutive_correct = 0
        self.lifeline_active = True
        self.visible_options = eliminate_options(question, self.rng)

        logger.info(
            "Lifeline used",
            extra={
                "user_id": self.user_id,
                "mode": self.mode.value if self.mode else None,
                "question_index": self.current_index,
            },
        )
        return True

    def tick(self) -> None:
        """Advance the mock countdown by one second, ending the session at zero."""
        if not self.active or self.mode != SessionMode.MOCK:
            return
        if self.time_remaining_seconds <= 0:
            return

        self.time_remaining_seconds -= 1
        if self.time_remaining_seconds == 0:
            self.notify("Time's Up!", "Your exam has been submitted automatically.")
            self.end_game()

    def end_game(self) -> None:
        """Finish the session and report results."""
        if not self.active:
            return

        self.status = SessionStatus.ENDED
        self.lifeline_active = False
        self.visible_options = None

        if self.mode == SessionMode.MOCK:
            self.mock_results = score_mock_exam(self.questions, self.per_question_result)
            if self.scores is not None:
                self._report(self.scores.record_mock_score, self.mock_results.score)
        elif self.scores is not None:
            self._report(self.scores.record_standard_score, self.score)

        logger.info(
            "Session ended",
            extra={
                "user_id": self.user_id,
                "mode": self.mode.value if self.mode else None,
                "score": self.score,
                "total_questions": len(self.questions),
                "lives": self.lives,
                "weighted_score": self.mock_results.score if self.mock_results else None,
            },
        )

    def reset(self) -> None:
        """Discard the attempt entirely (logout)."""
        self.mode = None
        self.status = SessionStatus.IDLE
        self.questions = []
        self.current_index = 0
        self.lives = settings.STANDARD_LIVES
        self.score = 0
        self.consecutive_correct = 0
        self.lifeline_active = False
        self.visible_options = None
        self.time_remaining_seconds = 0
        self.per_question_result = {}
        self.mock_results = None
        self._notifications = []

    # ------------------------------------------------------------------
    # Question store write-through
    # ------------------------------------------------------------------

    def add_question(self, payload: QuestionCreate) -> QuestionRecord | None:
        try:
            created = self.source.add_question(payload)
        except Exception as e:
            logger.error(
                "Failed to add question",
                extra={"user_id": self.user_id, "error": str(e)},
                exc_info=True,
            )
            self.notify("Error", "Failed to add question.", NotificationVariant.DESTRUCTIVE)
            return None

        self.notify("Question Added", "Successfully added to the database.")
        return created

    def import_questions(self, payloads: Sequence[QuestionCreate]) -> int:
        try:
            count = self.source.import_questions(payloads)
        except Exception as e:
            logger.error(
                "Failed to import questions",
                extra={"user_id": self.user_id, "count": len(payloads), "error": str(e)},
                exc_info=True,
            )
            self.notify("Import Failed", "Questions were not imported.", NotificationVariant.DESTRUCTIVE)
            return 0

        self.notify("Success", f"Imported {count} questions.")
        return count

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        question = self.current_question if self.active else None
        return SessionSnapshot(
            mode=self.mode,
            status=self.status,
            active=self.active,
            score=self.score,
            lives=self.lives,
            current_index=self.current_index,
            total_questions=len(self.questions),
            time_remaining_seconds=self.time_remaining_seconds,
            consecutive_correct=self.consecutive_correct,
            lifeline_active=self.lifeline_active,
            lifeline_available=self.lifeline_available,
            per_question_result=dict(self.per_question_result),
            current_question=(
                QuestionPublicOut.model_validate(question.model_dump()) if question else None
            ),
            visible_options=list(self.visible_options) if self.visible_options else None,
            mock_results=self.mock_results,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _report(self, record: Callable[[str, Any], Any], value: float | int) -> None:
        """Send a final result through a score sink method; failures become notifications."""
        if self.user_id is None:
            return
        try:
            record(self.user_id, value)
        except Exception as e:
            logger.error(
                "Failed to save session result",
                extra={"user_id": self.user_id, "method": record.__name__, "error": str(e)},
                exc_info=True,
            )
            self.notify(
                "Save Failed",
                "Your result could not be saved.",
                NotificationVariant.DESTRUCTIVE,
            )

    def _standard_questions(
        self, subject: Subject | None, set_number: int | None
    ) -> list[QuestionRecord]:
        pool = self._fetch(subject, set_number)
        return shuffled(pool, self.rng)[: settings.STANDARD_MAX_QUESTIONS]

    def _mock_questions(
        self, custom_questions: Sequence[QuestionRecord] | None
    ) -> list[QuestionRecord]:
        # Room or saved exam: run the list exactly as given, even when empty
        if custom_questions is not None:
            return list(custom_questions)

        # Imported mock board pool, in persisted order
        try:
            imported = self.source.fetch_mockboard_questions()
        except Exception as e:
            logger.warning(
                "Mock board pool unavailable",
                extra={"user_id": self.user_id, "error": str(e)},
            )
            imported = []
        if imported:
            return list(imported)

        pool = self._fetch()
        config = MockDistributionConfig.default(settings.MOCK_MAX_QUESTIONS)
        questions, meta, warnings = generate_mock_questions(pool, config, self.rng)
        if warnings:
            logger.info(
                "Mock distribution underfilled",
                extra={"user_id": self.user_id, "warnings": warnings, "meta": meta},
            )
        return questions

    def _fetch(
        self, subject: Subject | None = None, set_number: int | None = None
    ) -> list[QuestionRecord]:
        """Fetch a pool from the store, falling back to the bundled set."""
        try:
            pool = self.source.fetch_questions(subject=subject, set_number=set_number)
        except Exception as e:
            logger.warning(
                "Question store unavailable, using fallback questions",
                extra={"user_id": self.user_id, "error": str(e)},
                exc_info=True,
            )
            self.notify(
                "Offline Mode",
                "Could not load questions from the server. Using built-in questions.",
                NotificationVariant.DESTRUCTIVE,
            )
            return fallback_questions(subject=subject, set_number=set_number)

        if not pool:
            logger.info(
                "No stored questions match, using fallback questions",
                extra={
                    "user_id": self.user_id,
                    "subject": subject.value if subject else None,
                    "set_number": set_number,
                },
            )
            self.notify(
                "Using Built-in Questions",
                "No stored questions match this selection. Using built-in questions.",
            )
            return fallback_questions(subject=subject, set_number=set_number)

        return list(pool)
