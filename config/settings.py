"""Application settings and configuration management."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/practice.db")

    OPENAI_API_KEY: Optional[str] = None
    GRADER_BASE_URL: str = "https://api.openai.com"
    GRADER_ENDPOINT: str = "/v1/chat/completions"
    GRADER_MODEL: str = "gpt-4o-mini"
    GRADER_TIMEOUT_S: float = Field(default=30.0, ge=0.1)
    GRADER_MAX_TOKENS: int = Field(default=800, ge=1)

    DEFAULT_ROLE: str = "SWE Intern"
    DEFAULT_BEHAVIORAL_COUNT: int = Field(default=5, ge=0)
    DEFAULT_TECHNICAL_COUNT: int = Field(default=3, ge=0)

    GRADE_PACING_MS: int = Field(default=150, ge=0)
    API_BASE_URL: str = "http://127.0.0.1:8000"
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    LOG_LEVEL: str = "INFO"
    ENABLE_FILE_LOGS: bool = True
    LOG_FILE: str = "logs/practice.log"
    LOG_MAX_BYTES: int = Field(default=5_242_880, ge=1024)
    LOG_BACKUP_COUNT: int = Field(default=5, ge=0)

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")


settings = Settings()
