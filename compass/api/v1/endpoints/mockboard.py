"""Imported mock board pool endpoints."""

from fastapi import APIRouter, Response, status

from compass.core.app_exceptions import raise_not_found
from compass.core.dependencies import Questions
from compass.schemas.question import (
    MockboardClearResult,
    QuestionCreate,
    QuestionImport,
    QuestionImportResult,
    QuestionOut,
)
from compass.services.question_store import mockboard_to_out

router = APIRouter()


@router.get("", response_model=list[QuestionOut])
async def list_mockboard(questions: Questions) -> list[QuestionOut]:
    """Mock board questions in import order."""
    return [mockboard_to_out(row) for row in questions.list_mockboard()]


@router.post("", response_model=QuestionOut, status_code=status.HTTP_201_CREATED)
async def create_mockboard(payload: QuestionCreate, questions: Questions) -> QuestionOut:
    return mockboard_to_out(questions.create_mockboard(payload))


@router.post("/bulk", response_model=QuestionImportResult, status_code=status.HTTP_201_CREATED)
async def import_mockboard(payload: QuestionImport, questions: Questions) -> QuestionImportResult:
    rows = questions.import_mockboard(payload.questions)
    return QuestionImportResult(count=len(rows), questions=[mockboard_to_out(r) for r in rows])


@router.delete("", response_model=MockboardClearResult)
async def clear_mockboard(questions: Questions) -> MockboardClearResult:
    return MockboardClearResult(deleted_count=questions.clear_mockboard())


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mockboard(question_id: str, questions: Questions) -> Response:
    if not questions.delete_mockboard(question_id):
        raise_not_found("Mock board question", question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
