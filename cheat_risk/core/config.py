"""Configuration settings for the cheat risk application."""

from __future__ import annotations

from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: str = Field(default="http://localhost:3000,http://127.0.0.1:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    # Chess.com public API
    chess_api_base_url: str = Field(default="https://api.chess.com/pub")
    chess_api_timeout_seconds: float = Field(default=10.0, gt=0)
    chess_api_max_retries: int = Field(default=3, ge=0)
    chess_api_backoff_base_seconds: float = Field(
        default=1.0,
        ge=0,
        description="First retry delay; doubled on every further attempt",
    )
    chess_api_max_backoff_seconds: float = Field(
        default=30.0, gt=0, description="Upper bound of a single retry delay"
    )
    chess_api_user_agent: str = Field(default="CheatRiskAnalyzer/1.0")

    # Player data gathering
    cache_ttl_seconds: int = Field(
        default=300, ge=0, description="TTL of cached player payloads"
    )
    cache_max_entries: int = Field(default=500, ge=1)
    recent_games_limit: int = Field(default=50, ge=1)
    rated_only: bool = Field(
        default=True, description="Only count rated games in the recent sample"
    )

    # History
    history_path: Optional[str] = Field(
        default=None,
        description="JSON file for analysis history; kept in memory when unset",
    )
    history_max_entries: int = Field(default=50, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
