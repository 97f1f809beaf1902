"""User profile and leaderboard endpoints."""

from fastapi import APIRouter, Query

from compass.core.app_exceptions import raise_not_found, raise_not_owner
from compass.core.dependencies import UserId, Users
from compass.schemas.user import LeaderboardEntry, UserProfileOut

router = APIRouter(tags=["Users"])


@router.get("/users/{user_id}", response_model=UserProfileOut)
async def get_user(user_id: str, users: Users) -> UserProfileOut:
    profile = users.get(user_id)
    if profile is None:
        raise_not_found("User", user_id)
    return UserProfileOut.model_validate(profile)


@router.post("/users/{user_id}/reset-stats", response_model=UserProfileOut)
async def reset_stats(user_id: str, caller_id: UserId, users: Users) -> UserProfileOut:
    """Reset lives and score history of the caller's own profile."""
    if caller_id != user_id:
        raise_not_owner("Cannot reset another user's stats")
    profile = users.reset_stats(user_id)
    if profile is None:
        raise_not_found("User", user_id)
    return UserProfileOut.model_validate(profile)


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def leaderboard(
    users: Users,
    limit: int = Query(10, ge=1, le=100),
) -> list[LeaderboardEntry]:
    """Mock board leaderboard, highest score first."""
    return [
        LeaderboardEntry(
            rank=rank,
            id=profile.id,
            name=profile.name,
            role=profile.role,
            score=profile.mock_board_score,
        )
        for rank, profile in enumerate(users.leaderboard(limit), start=1)
    ]
