"""FastAPI application factory and main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import func, select

import compass.models  # noqa: F401  (register tables on Base.metadata)
from compass.api.v1.router import api_router
from compass.common.request_id import RequestIDMiddleware
from compass.core.config import settings
from compass.core.errors import (
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from compass.core.logging import get_logger, setup_logging
from compass.data.fallback import FALLBACK_QUESTIONS
from compass.db.base import Base
from compass.db.engine import engine
from compass.db.session import SessionLocal
from compass.models.question import Question
from compass.services.session_registry import SessionRegistry

logger = get_logger(__name__)


def seed_fallback_questions() -> int:
    """Load the built-in questions into an empty question bank."""
    with SessionLocal() as db:
        existing = db.execute(select(func.count()).select_from(Question)).scalar() or 0
        if existing:
            return 0
        db.add_all(
            Question(
                text=q.text,
                options=list(q.options),
                correct_answer=q.correct_answer,
                subject=q.subject.value,
                set_number=q.set_number,
                category=q.category.value,
            )
            for q in FALLBACK_QUESTIONS
        )
        db.commit()
    logger.info("Seeded fallback questions", extra={"count": len(FALLBACK_QUESTIONS)})
    return len(FALLBACK_QUESTIONS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    # Create tables (in production, use migrations)
    if settings.ENV in ("dev", "test"):
        Base.metadata.create_all(bind=engine)
    if settings.SEED_FALLBACK_QUESTIONS:
        seed_fallback_questions()
    yield
    # Shutdown
    app.state.registry.close()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Librarianship licensure exam review API",
        openapi_url="/openapi.json" if settings.ENV != "prod" else None,
        docs_url="/docs" if settings.ENV != "prod" else None,
        redoc_url="/redoc" if settings.ENV != "prod" else None,
        lifespan=lifespan,
    )
    app.state.registry = SessionRegistry(session_factory=SessionLocal)

    # Add middleware (order matters - first added is outermost)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add exception handlers
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include API routers
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint - API information."""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "docs_url": "/docs" if settings.ENV != "prod" else None,
        }

    return app


app = create_app()
