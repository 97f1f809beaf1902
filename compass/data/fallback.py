"""Built-in question set used when the question store cannot supply a pool."""

from compass.models.question import Subject
from compass.schemas.question import QuestionOut

GENERATED_PER_SUBJECT = 15

_SAMPLE_QUESTIONS: list[dict] = [
    {
        "id": "LOM-1",
        "text": "Which of the following management theories emphasizes the importance "
        "of human relations and employee satisfaction?",
        "options": [
            "Scientific Management",
            "Human Relations Theory",
            "Bureaucratic Theory",
            "Systems Theory",
        ],
        "correct_answer": 1,
        "subject": Subject.LIBRARY_ORGANIZATION,
    },
    {
        "id": "CAT-1",
        "text": "In the Dewey Decimal Classification system, what does the 020 class represent?",
        "options": [
            "Philosophy & Psychology",
            "Social Sciences",
            "Library & Information Sciences",
            "General Works",
        ],
        "correct_answer": 2,
        "subject": Subject.CATALOGING,
    },
    {
        "id": "REF-1",
        "text": "Which type of reference source provides a concise overview of a specific subject?",
        "options": ["Directory", "Encyclopedia", "Almanac", "Yearbook"],
        "correct_answer": 1,
        "subject": Subject.REFERENCE_SERVICES,
    },
    {
        "id": "IT-1",
        "text": "What is the standard protocol used for retrieving emails from a server?",
        "options": ["SMTP", "FTP", "IMAP", "HTTP"],
        "correct_answer": 2,
        "subject": Subject.INFORMATION_TECHNOLOGY,
    },
    {
        "id": "IDX-1",
        "text": "Which type of abstract is critical and evaluative?",
        "options": [
            "Informative Abstract",
            "Indicative Abstract",
            "Critical Abstract",
            "Structured Abstract",
        ],
        "correct_answer": 2,
        "subject": Subject.INDEXING,
    },
    {
        "id": "ACQ-1",
        "text": "What is the first step in the acquisition process?",
        "options": ["Ordering", "Selection", "Receiving", "Processing"],
        "correct_answer": 1,
        "subject": Subject.SELECTION,
    },
]


def _generate(subject: Subject, count: int) -> list[QuestionOut]:
    """Filler questions; option 0 is always correct, sets cycle 2, 3, 1."""
    return [
        QuestionOut(
            id=f"{subject.value[:3]}-{i}",
            text=f"Sample question #{i} about {subject.value}. What is the correct principle?",
            options=[
                f"Correct Answer for {i}",
                f"Distractor A for {i}",
                f"Distractor B for {i}",
                f"Distractor C for {i}",
            ],
            correct_answer=0,
            subject=subject,
            set_number=i % 3 + 1,
        )
        for i in range(1, count + 1)
    ]


def _build() -> tuple[QuestionOut, ...]:
    questions = [QuestionOut(set_number=1, **item) for item in _SAMPLE_QUESTIONS]
    for subject in Subject:
        questions.extend(_generate(subject, GENERATED_PER_SUBJECT))
    return tuple(questions)


FALLBACK_QUESTIONS: tuple[QuestionOut, ...] = _build()


def fallback_questions(
    subject: Subject | None = None, set_number: int | None = None
) -> list[QuestionOut]:
    """Bundled questions filtered the same way the store filters."""
    return [
        q
        for q in FALLBACK_QUESTIONS
        if (subject is None or q.subject == subject)
        and (set_number is None or q.set_number == set_number)
    ]
