"""Application-specific exceptions for consistent error handling."""

from typing import Any

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Application error with standardized error code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        """Initialize application error."""
        super().__init__(
            status_code=status_code,
            detail={
                "code": code,
                "message": message,
                "details": details,
            },
        )
        self.code = code
        self.message = message
        self.details = details


def raise_app_error(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | list[Any] | None = None,
) -> None:
    """Raise an application error with standardized format."""
    raise AppError(status_code=status_code, code=code, message=message, details=details)


def raise_not_found(entity: str, entity_id: str) -> None:
    """Raise a 404 for a missing question, exam, room, profile or session."""
    raise AppError(
        status_code=status.HTTP_404_NOT_FOUND,
        code="NOT_FOUND",
        message=f"{entity} not found",
        details={"id": entity_id},
    )


def raise_not_owner(message: str) -> None:
    """Raise a 403 when the X-User-Id caller does not own the target."""
    raise AppError(status_code=status.HTTP_403_FORBIDDEN, code="FORBIDDEN", message=message)


def raise_empty_question_set(source: str, source_id: str, requested: int) -> None:
    """
    Raise a 409 when a room or saved exam resolves to no questions.

    Mock sessions run these lists verbatim, so an empty one cannot start.

    Args:
        source: "Room" or "Exam"; also gives the ROOM_EMPTY / EXAM_EMPTY code
        source_id: Id of the room or exam
        requested: Number of question ids it listed
    """
    raise AppError(
        status_code=status.HTTP_409_CONFLICT,
        code=f"{source.upper()}_EMPTY",
        message=f"{source} has no questions",
        details={"id": source_id, "requested": requested, "resolved": 0},
    )
