"""
App configuration loaded from environment variables (.env)

Anything that changes between development and production lives here
"""

from datetime import timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "civic_reports"

    # JWT - only used to read the current user id from the bearer token
    jwt_secret: str  # A long random string shared with the auth service
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # Tokens expire after 7 days

    # App
    app_env: str = "development"  # or "production"
    debug: bool = False
    log_level: str = "INFO"

    # CORS - comma separated origins
    cors_origins: str = "http://localhost:5173"

    # ==================== Leaderboard ====================
    # Calendar days for streaks are computed in this IANA time zone
    streak_timezone: str = "UTC"
    leaderboard_default_limit: int = 100
    leaderboard_max_limit: int = 500

    # Synthetic leaderboard used when the report store is unavailable or empty.
    # Set fallback_seed to get the same sample data on every request.
    fallback_size: int = 10
    fallback_seed: int | None = None

    # ==================== AI descriptions ====================
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-1.5-flash"
    description_timeout_seconds: float = 30.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore unknown keys in .env

    @property
    def streak_tz(self) -> tzinfo:
        """Reference time zone for streak calendar days"""
        if self.streak_timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.streak_timezone)


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance"""
    return Settings()
