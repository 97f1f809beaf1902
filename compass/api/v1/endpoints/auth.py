"""Login and logout endpoints."""

from fastapi import APIRouter, status

from compass.core.app_exceptions import raise_app_error
from compass.core.dependencies import Registry, UserId, Users
from compass.core.logging import get_logger
from compass.schemas.user import LoginRequest, LoginResponse, LogoutResponse, UserProfileOut
from compass.services.user_store import AuthError

logger = get_logger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in",
    description="Fetch or create the profile for a name and role. Admins need the passcode.",
)
async def login(request_data: LoginRequest, users: Users) -> LoginResponse:
    try:
        profile = users.login(request_data.username, request_data.password, request_data.role)
    except AuthError as e:
        raise_app_error(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="UNAUTHORIZED",
            message=e.detail,
        )

    logger.info("User logged in", extra={"user_id": profile.id, "role": profile.role})
    return LoginResponse(user=UserProfileOut.model_validate(profile))


@router.post(
    "/logout",
    response_model=LogoutResponse,
    status_code=status.HTTP_200_OK,
    summary="Log out",
    description="Discard every live session of the caller.",
)
async def logout(user_id: UserId, registry: Registry) -> LogoutResponse:
    removed = registry.remove_for_user(user_id)
    return LogoutResponse(status="ok", sessions_removed=removed)
