"""Application configuration from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Workout Tracker API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080

    # API (routes are mounted at the root by default: /auth, /workouts, ...)
    api_v1_prefix: str = ""

    # Database (single SQLite file)
    db_path: str = "workout_tracker.db"

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_hours: int = 72

    # Optional third-party key handed to authenticated clients via /api/config
    groq_api_key: str = ""

    # Static frontend served under /app when the directory exists
    frontend_dir: str = "frontend"

    def _build_db_url(self, scheme: str = "sqlite") -> str:
        if self.db_path == ":memory:":
            return f"{scheme}:///:memory:"
        return f"{scheme}:///{Path(self.db_path).expanduser()}"

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        return self._build_db_url(scheme="sqlite")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (aiosqlite driver)."""
        return self._build_db_url(scheme="sqlite+aiosqlite")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
