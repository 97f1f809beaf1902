"""Mock board room endpoints."""

from fastapi import APIRouter, Response, status

from compass.core.app_exceptions import raise_app_error, raise_empty_question_set, raise_not_found
from compass.core.dependencies import Registry, Rooms, UserId
from compass.core.logging import get_logger
from compass.schemas.room import RoomCreate, RoomJoin, RoomOut, RoomUpdate, RoomVerify, RoomVerifyResult
from compass.schemas.session import SessionMode, SessionStateOut

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=list[RoomOut])
async def list_rooms(rooms: Rooms) -> list[RoomOut]:
    return [RoomOut.model_validate(room) for room in rooms.list_rooms()]


@router.post("", response_model=RoomOut, status_code=status.HTTP_201_CREATED)
async def create_room(payload: RoomCreate, rooms: Rooms) -> RoomOut:
    return RoomOut.model_validate(rooms.create(payload))


@router.post("/join", response_model=SessionStateOut, status_code=status.HTTP_201_CREATED)
async def join_room(
    payload: RoomJoin, user_id: UserId, rooms: Rooms, registry: Registry
) -> SessionStateOut:
    """Check a room's password by name and start a mock session on its questions."""
    room = rooms.get_by_name(payload.name)
    if room is None or not rooms.verify_password(room.id, payload.password):
        logger.warning("Room join rejected", extra={"user_id": user_id, "room_name": payload.name})
        raise_app_error(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="ROOM_ACCESS_DENIED",
            message="Invalid room name or password",
        )

    questions = rooms.resolve_room_questions(room.id) or []
    if not questions:
        raise_empty_question_set("Room", room.id, len(room.question_ids))

    entry = registry.start(user_id, SessionMode.MOCK, custom_questions=questions)
    logger.info(
        "Room joined",
        extra={"user_id": user_id, "room_id": room.id, "session_id": entry.session_id},
    )
    return SessionStateOut(
        session_id=entry.session_id,
        state=entry.session.snapshot(),
        notifications=entry.session.drain_notifications(),
    )


@router.get("/{room_id}", response_model=RoomOut)
async def get_room(room_id: str, rooms: Rooms) -> RoomOut:
    room = rooms.get(room_id)
    if room is None:
        raise_not_found("Room", room_id)
    return RoomOut.model_validate(room)


@router.post("/{room_id}/verify", response_model=RoomVerifyResult)
async def verify_room(room_id: str, payload: RoomVerify, rooms: Rooms) -> RoomVerifyResult:
    return RoomVerifyResult(valid=rooms.verify_password(room_id, payload.password))


@router.put("/{room_id}", response_model=RoomOut)
async def update_room(room_id: str, patch: RoomUpdate, rooms: Rooms) -> RoomOut:
    if not patch.model_dump(exclude_none=True):
        raise_app_error(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="INVALID_PAYLOAD",
            message="At least one of name, password or question_ids is required",
        )
    room = rooms.update(room_id, patch)
    if room is None:
        raise_not_found("Room", room_id)
    return RoomOut.model_validate(room)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(room_id: str, rooms: Rooms) -> Response:
    if not rooms.delete(room_id):
        raise_not_found("Room", room_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
