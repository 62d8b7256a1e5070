"""
Configuration settings for the safeprep question engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SAFEPREP_",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Exam Simulation
    # ========================================
    exam_question_count: int = Field(
        default=45,
        description="Number of questions drawn for a full exam",
    )
    exam_time_limit_minutes: int = Field(
        default=90,
        description="Time limit shown for the exam simulation",
    )
    exam_passing_percentage: int = Field(
        default=73,
        description="Score (percent) required to pass",
    )

    # ========================================
    # Lesson Quizzes
    # ========================================
    section_quiz_max_questions: int = Field(
        default=10,
        description="Maximum questions drawn for a single section quiz",
    )

    # ========================================
    # Question Pools
    # ========================================
    dedup_key_length: int = Field(
        default=80,
        description="Leading characters of question text used as the dedup key",
    )

    # ========================================
    # External Question Source
    # ========================================
    question_source_url: str | None = Field(
        default=None,
        description="HTTP endpoint returning a JSON array of question records",
    )
    question_source_timeout_seconds: float = Field(
        default=10.0,
        description="Request timeout for the external question source",
    )
    external_cache_ttl_seconds: float = Field(
        default=300.0,
        description="How long a fetched external snapshot stays fresh",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )

    def has_external_source(self) -> bool:
        """Check if a remote question source is configured."""
        return bool(self.question_source_url)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
