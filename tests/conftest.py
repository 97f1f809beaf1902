"""Pytest configuration and shared fixtures."""

import os

# Must be set before compass.core.config is imported
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import random
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import compass.models  # noqa: F401
from compass.core.dependencies import get_registry
from compass.db.base import Base
from compass.db.session import get_db
from compass.main import app
from compass.models.question import Question, QuestionCategory, Subject
from compass.models.user import UserProfile, UserRole
from compass.services.session_registry import SessionRegistry
from tests.helpers.fakes import InMemorySource, RecordingSink

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


@pytest.fixture
def test_engine() -> Generator[Engine, None, None]:
    """Fresh in-memory SQLite database shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(test_engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=test_engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(20240501)


@pytest.fixture
def registry(session_factory: sessionmaker) -> SessionRegistry:
    """Registry over the test database; timers tick slowly so tests never race them."""
    return SessionRegistry(
        session_factory=session_factory,
        rng_factory=lambda: random.Random(7),
        timer_interval=60.0,
    )


@pytest.fixture
def client(session_factory: sessionmaker, registry: SessionRegistry) -> Generator[TestClient, None, None]:
    """Test client wired to the test database and registry."""

    def override_get_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_registry] = lambda: registry
    try:
        with TestClient(app) as test_client:
            yield test_client
            test_client.portal.call(registry.close)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def source() -> InMemorySource:
    return InMemorySource()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def seeded_questions(db: Session) -> list[Question]:
    """15 Cataloging set-1 questions plus 5 of every other subject across sets."""
    questions: list[Question] = []
    for i in range(15):
        questions.append(
            Question(
                text=f"Cataloging question {i}",
                options=["A", "B", "C", "D"],
                correct_answer=i % 4,
                subject=Subject.CATALOGING.value,
                set_number=1,
                category=QuestionCategory.STANDARD.value,
            )
        )
    for subject in Subject:
        if subject == Subject.CATALOGING:
            continue
        for i in range(5):
            questions.append(
                Question(
                    text=f"{subject.value} question {i}",
                    options=["A", "B", "C", "D"],
                    correct_answer=0,
                    subject=subject.value,
                    set_number=i % 3 + 1,
                    category=QuestionCategory.STANDARD.value,
                )
            )
    db.add_all(questions)
    db.commit()
    return questions


@pytest.fixture
def student(db: Session) -> UserProfile:
    profile = UserProfile(
        name="Alice Librarian",
        role=UserRole.STUDENT.value,
        lives=10,
        mock_board_score=None,
        standard_game_scores=[],
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile
