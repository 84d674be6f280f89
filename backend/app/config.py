from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    CORS_ORIGIN_REGEX: Optional[str] = None
    # JSON list of questions; the bundled holiday set is used when unset.
    QUESTIONS_FILE: Optional[str] = None
    ALLOW_LATE_JOIN: bool = True
    POLL_INTERVAL_MS: int = 1000
    ANSWER_WINDOW_SECONDS: int = 30
    MAX_EVENTS: int = 200
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
