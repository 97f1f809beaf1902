"""Database session management."""

from contextlib import contextmanager
from typing import Callable, Generator

from sqlalchemy.orm import Session, sessionmaker

from compass.db.engine import engine

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,  # Prevent lazy loading issues
)


def get_db() -> Generator[Session, None, None]:
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope(factory: Callable[[], Session] = SessionLocal) -> Generator[Session, None, None]:
    """
    Short-lived session for work done outside a request.

    Session timers and the scoped question/score adapters outlive any single
    request, so each call opens its own session here. Uncommitted work is
    rolled back if the block raises; the session is always closed.
    """
    db = factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
