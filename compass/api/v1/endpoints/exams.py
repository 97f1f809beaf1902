"""Saved exam endpoints."""

from fastapi import APIRouter, Response, status

from compass.core.app_exceptions import raise_not_found
from compass.core.dependencies import Exams
from compass.schemas.exam import ExamCreate, ExamOut, ExamUpdate

router = APIRouter()


@router.get("", response_model=list[ExamOut])
async def list_exams(exams: Exams) -> list[ExamOut]:
    return [ExamOut.model_validate(exam) for exam in exams.list_exams()]


@router.post("", response_model=ExamOut, status_code=status.HTTP_201_CREATED)
async def create_exam(payload: ExamCreate, exams: Exams) -> ExamOut:
    return ExamOut.model_validate(exams.create(payload))


@router.get("/{exam_id}", response_model=ExamOut)
async def get_exam(exam_id: str, exams: Exams) -> ExamOut:
    exam = exams.get(exam_id)
    if exam is None:
        raise_not_found("Exam", exam_id)
    return ExamOut.model_validate(exam)


@router.put("/{exam_id}", response_model=ExamOut)
async def update_exam(exam_id: str, patch: ExamUpdate, exams: Exams) -> ExamOut:
    exam = exams.update(exam_id, patch)
    if exam is None:
        raise_not_found("Exam", exam_id)
    return ExamOut.model_validate(exam)


@router.delete("/{exam_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exam(exam_id: str, exams: Exams) -> Response:
    if not exams.delete(exam_id):
        raise_not_found("Exam", exam_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
