"""Application configuration loaded from the environment."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from ``EXERCISE_TRACKER_*`` variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="EXERCISE_TRACKER_",
        env_file=".env",
        extra="ignore",
    )

    # Storage
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the SQLite database",
    )
    db_name: str = "exercise_tracker.db"

    # Server
    host: str = "127.0.0.1"
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("EXERCISE_TRACKER_PORT", "PORT"),
    )
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"

    @property
    def db_path(self) -> Path:
        """Full path to the database file."""
        return self.data_dir / self.db_name


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
