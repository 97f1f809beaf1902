"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from compass.api.v1.endpoints import auth, exams, health, mockboard, questions, rooms, sessions, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(users.router, prefix="", tags=["Users"])
api_router.include_router(questions.router, prefix="/questions", tags=["Questions"])
api_router.include_router(mockboard.router, prefix="/mockboard-questions", tags=["Mock Board"])
api_router.include_router(exams.router, prefix="/exams", tags=["Exams"])
api_router.include_router(rooms.router, prefix="/rooms", tags=["Rooms"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["Sessions"])
