#!/usr/bin/env python3
"""Load questions from a JSON file into the question bank.

Each entry needs text, options, subject and either correct_answer or
correctAnswer; set/set_number defaults to 1. Entries that fail validation or
insertion are logged and skipped.

Usage:
    python scripts/populate_questions.py [path/to/questions.json]
"""

import json
import sys
from pathlib import Path

# Add parent directory to path to import compass modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from compass.core.logging import get_logger, setup_logging
from compass.db.session import SessionLocal
from compass.schemas.question import QuestionCreate
from compass.services.question_store import QuestionStore

logger = get_logger(__name__)

DEFAULT_FILE = Path("data/questions.json")


def to_payload(item: dict) -> QuestionCreate:
    """Accept both snake_case and the camelCase export format."""
    return QuestionCreate(
        text=item.get("text"),
        options=item.get("options"),
        correct_answer=item.get("correct_answer", item.get("correctAnswer", 0)),
        subject=item.get("subject"),
        set_number=item.get("set_number", item.get("set")) or 1,
        category=item.get("category", "standard"),
    )


def populate_questions(path: Path) -> tuple[int, int]:
    """Insert every valid question; returns (created, failed)."""
    items = json.loads(path.read_text(encoding="utf-8"))
    print(f"Loading {len(items)} questions...")

    created = failed = 0
    db = SessionLocal()
    try:
        store = QuestionStore(db)
        for item in items:
            label = item.get("id", created + failed)
            try:
                store.create(to_payload(item))
            except ValidationError as e:
                failed += 1
                logger.warning(
                    "Skipping invalid question",
                    extra={"question": label, "errors": e.errors(include_url=False)},
                )
                continue
            except SQLAlchemyError as e:
                db.rollback()
                failed += 1
                logger.error(
                    "Failed to create question",
                    extra={"question": label, "error": str(e)},
                )
                continue
            created += 1
    finally:
        db.close()

    logger.info("Questions loaded", extra={"created": created, "failed": failed})
    return created, failed


if __name__ == "__main__":
    setup_logging()
    source = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_FILE
    try:
        created, failed = populate_questions(source)
        print(f"✓ Created {created} question(s), skipped {failed}.")
    except (OSError, json.JSONDecodeError) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
