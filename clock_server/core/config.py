from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 3000


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    PROJECT_NAME: str = "Clock server"

    HOST: str = "0.0.0.0"
    PORT: int = DEFAULT_PORT

    # Logging
    LOG_LEVEL: str = "INFO"
    UVICORN_ACCESS_LOG: bool = False
    REQUEST_LOGS_ENABLED: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("PORT", mode="before")
    @classmethod
    def _parse_port(cls, value: Any) -> int:
        """Fall back to the default port when PORT is empty or not a number."""
        if value is None:
            return DEFAULT_PORT
        try:
            return int(str(value).strip())
        except ValueError:
            return DEFAULT_PORT


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return cached settings object to avoid re-parsing env vars."""
    return Settings()

# Export a module-level settings instance for easy imports
settings = get_settings()
