#!/usr/bin/env python3
"""Delete every mock board question.

Clears the imported mock board pool and the mockboard-category questions of
the main bank.

Usage:
    python scripts/delete_mockboard_questions.py
"""

import sys
from pathlib import Path

# Add parent directory to path to import compass modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from compass.core.logging import get_logger, setup_logging
from compass.db.session import SessionLocal
from compass.models.question import QuestionCategory
from compass.services.question_store import QuestionStore

logger = get_logger(__name__)


def delete_mockboard_questions() -> int:
    db = SessionLocal()
    try:
        store = QuestionStore(db)
        pool_deleted = store.clear_mockboard()
        bank_deleted = store.delete_category(QuestionCategory.MOCKBOARD)
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting mock board questions: {e}", exc_info=True)
        raise
    finally:
        db.close()

    total = pool_deleted + bank_deleted
    logger.info(
        "Mock board questions deleted",
        extra={"pool_deleted": pool_deleted, "bank_deleted": bank_deleted},
    )
    return total


if __name__ == "__main__":
    setup_logging()
    print("Deleting all mock board questions...")
    try:
        deleted = delete_mockboard_questions()
        print(f"✓ Successfully deleted {deleted} mock board question(s).")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
