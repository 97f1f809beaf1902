"""Application settings and configuration."""

from typing import Literal

from pydantic import Field, model_validator  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    ENV: Literal["dev", "staging", "prod", "test"] = Field(default="dev")
    PROJECT_NAME: str = Field(default="LIS ComPASS API")

    # API
    API_PREFIX: str = Field(default="/v1")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./compass.db")

    # CORS - Accept string or list, will be normalized to list
    CORS_ORIGINS: str | list[str] = Field(default="http://localhost:5173,http://localhost:3000")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Admin login (plain equality check, replace with a real credential store)
    ADMIN_PASSCODE: str = Field(default="123")

    # Exam session rules
    STANDARD_LIVES: int = Field(default=10)
    STANDARD_MAX_QUESTIONS: int = Field(default=100)
    MOCK_DURATION_SECONDS: int = Field(default=500 * 60)
    MOCK_MAX_QUESTIONS: int = Field(default=650)
    LIFELINE_STREAK: int = Field(default=5)
    PASSING_SCORE: float = Field(default=75.0)

    # Question fetching
    QUESTION_BATCH_SIZE: int = Field(default=100)
    ROOM_MAX_QUESTIONS: int = Field(default=1000)

    # Seeding
    SEED_FALLBACK_QUESTIONS: bool = Field(default=False)

    @model_validator(mode="before")
    @classmethod
    def parse_cors_origins(cls, data):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(data, dict) and "CORS_ORIGINS" in data:
            cors_origins = data["CORS_ORIGINS"]
            if isinstance(cors_origins, str):
                data["CORS_ORIGINS"] = [
                    origin.strip() for origin in cors_origins.split(",") if origin.strip()
                ]
        return data

    def __init__(self, **kwargs):
        """Validate settings on initialization."""
        super().__init__(**kwargs)
        # Ensure CORS_ORIGINS is a list after initialization
        if isinstance(self.CORS_ORIGINS, str):
            object.__setattr__(
                self,
                "CORS_ORIGINS",
                [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()],
            )
        # Fail fast in production if critical vars are missing
        if self.ENV == "prod":
            if self.DATABASE_URL == "sqlite:///./compass.db":
                raise ValueError("DATABASE_URL must be set in production")
            if self.ADMIN_PASSCODE == "123":
                raise ValueError("ADMIN_PASSCODE must be changed in production")


# Global settings instance
settings = Settings()
