"""Pydantic schemas for login and user profiles."""

from pydantic import BaseModel, ConfigDict, Field

from compass.models.user import UserRole


class LoginRequest(BaseModel):
    """Login request."""

    username: str = Field(..., min_length=1)
    password: str | None = None
    role: UserRole = UserRole.STUDENT


class UserProfileOut(BaseModel):
    """User profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    role: UserRole
    lives: int
    mock_board_score: float | None
    standard_game_scores: list[int]


class LoginResponse(BaseModel):
    user: UserProfileOut


class LeaderboardEntry(BaseModel):
    """One row of the mock board leaderboard."""

    rank: int
    id: str
    name: str
    role: UserRole
    score: float


class LogoutResponse(BaseModel):
    status: str = "ok"
    sessions_removed: int = 0
