"""Application settings via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables with ZYSCOPE_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="ZYSCOPE_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    host: str = "127.0.0.1"
    port: int = 3000
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///./zyscope.sqlite"
    redis_url: str = ""  # empty disables Redis-backed rate limiting
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 60
    log_level: str = "INFO"
    log_format: str = "json"

    # --- Catalog ---
    catalog_path: str = ""  # empty uses the bundled cities.json

    # --- Leaderboard / feeds ---
    leaderboard_default_limit: int = 10
    recent_reviews_default_limit: int = 10


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
