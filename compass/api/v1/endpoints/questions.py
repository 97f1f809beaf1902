"""Question bank endpoints."""

from fastapi import APIRouter, Query, Response, status

from compass.core.app_exceptions import raise_not_found
from compass.core.config import settings
from compass.core.dependencies import Questions, Rooms
from compass.models.question import QuestionCategory, Subject
from compass.schemas.question import (
    QuestionBatchOut,
    QuestionBatchRequest,
    QuestionCreate,
    QuestionImport,
    QuestionImportResult,
    QuestionOut,
    QuestionUpdate,
    RoomQuestionsRequest,
)
from compass.services.question_store import paginate_ids

router = APIRouter()


@router.get("", response_model=list[QuestionOut] | QuestionBatchOut)
async def list_questions(
    questions: Questions,
    category: QuestionCategory | None = Query(None),
    subject: Subject | None = Query(None),
    set_number: int | None = Query(None, ge=1, le=3),
    ids: str | None = Query(None, description="Comma-separated ids; switches to a batched fetch"),
    batch_size: int = Query(50, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> list[QuestionOut] | QuestionBatchOut:
    """
    List questions, or fetch a page of an explicit id list.

    With ``ids`` the response is a batch envelope in id order, otherwise the
    filtered list.
    """
    if ids:
        id_list = [qid.strip() for qid in ids.split(",") if qid.strip()]
        batch, has_more, next_offset = paginate_ids(id_list, offset, batch_size)
        found = [q for q in (questions.get(qid) for qid in batch) if q is not None]
        return QuestionBatchOut(
            questions=[QuestionOut.model_validate(q) for q in found],
            has_more=has_more,
            total=len(id_list),
            offset=next_offset,
        )

    rows = questions.list_questions(category=category, subject=subject, set_number=set_number)
    return [QuestionOut.model_validate(q) for q in rows]


@router.post("", response_model=QuestionOut, status_code=status.HTTP_201_CREATED)
async def create_question(payload: QuestionCreate, questions: Questions) -> QuestionOut:
    return QuestionOut.model_validate(questions.create(payload))


@router.post("/bulk", response_model=QuestionBatchOut)
async def bulk_questions(request_data: QuestionBatchRequest, questions: Questions) -> QuestionBatchOut:
    """Page through a large id list in one round trip per batch."""
    batch, has_more, next_offset = paginate_ids(
        request_data.ids, request_data.offset, request_data.batch_size
    )
    return QuestionBatchOut(
        questions=[QuestionOut.model_validate(q) for q in questions.get_bulk(batch)],
        has_more=has_more,
        total=len(request_data.ids),
        offset=next_offset,
    )


@router.post("/room", response_model=QuestionBatchOut)
async def room_questions(
    request_data: RoomQuestionsRequest, questions: Questions, rooms: Rooms
) -> QuestionBatchOut:
    """Page through a room's questions."""
    room = rooms.get(request_data.room_id)
    if room is None:
        raise_not_found("Room", request_data.room_id)

    ids = room.question_ids[: settings.ROOM_MAX_QUESTIONS]
    batch, has_more, next_offset = paginate_ids(ids, request_data.offset, request_data.batch_size)
    return QuestionBatchOut(
        questions=questions.resolve_ids(batch),
        has_more=has_more,
        total=len(ids),
        offset=next_offset,
    )


@router.post("/import", response_model=QuestionImportResult, status_code=status.HTTP_201_CREATED)
async def import_questions(payload: QuestionImport, questions: Questions) -> QuestionImportResult:
    created = questions.create_many(payload.questions)
    return QuestionImportResult(
        count=len(created),
        questions=[QuestionOut.model_validate(q) for q in created],
    )


@router.get("/{question_id}", response_model=QuestionOut)
async def get_question(question_id: str, questions: Questions) -> QuestionOut:
    question = questions.get(question_id)
    if question is None:
        raise_not_found("Question", question_id)
    return QuestionOut.model_validate(question)


@router.put("/{question_id}", response_model=QuestionOut)
async def update_question(
    question_id: str, patch: QuestionUpdate, questions: Questions
) -> QuestionOut:
    question = questions.update(question_id, patch)
    if question is None:
        raise_not_found("Question", question_id)
    return QuestionOut.model_validate(question)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(question_id: str, questions: Questions) -> Response:
    if not questions.delete(question_id):
        raise_not_found("Question", question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
