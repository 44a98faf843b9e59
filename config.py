"""
Configuration settings for the surveyor CLI.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    data_dir: Path = Field(
        default=Path("data"),
        description="Root directory for surveys, tests and responses",
    )
    surveys_dir: Path | None = Field(
        default=None,
        description="Directory for saved surveys (default: <data_dir>/surveys)",
    )
    survey_responses_dir: Path | None = Field(
        default=None,
        description="Directory for survey responses (default: <data_dir>/responses)",
    )
    tests_dir: Path | None = Field(
        default=None,
        description="Directory for saved tests (default: <data_dir>/tests)",
    )
    test_responses_dir: Path | None = Field(
        default=None,
        description="Directory for test responses (default: <data_dir>/test_responses)",
    )
    collection_extension: str = Field(
        default=".json",
        description="File extension for saved surveys and tests",
    )
    response_extension: str = Field(
        default=".resp",
        description="File extension for response records",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum level for log messages written to stderr",
    )

    @property
    def surveys_path(self) -> Path:
        return self.surveys_dir or self.data_dir / "surveys"

    @property
    def survey_responses_path(self) -> Path:
        return self.survey_responses_dir or self.data_dir / "responses"

    @property
    def tests_path(self) -> Path:
        return self.tests_dir or self.data_dir / "tests"

    @property
    def test_responses_path(self) -> Path:
        return self.test_responses_dir or self.data_dir / "test_responses"

    def get_storage_config(self) -> dict[str, str]:
        """Get resolved storage locations as a dictionary."""
        return {
            "surveys": str(self.surveys_path),
            "survey_responses": str(self.survey_responses_path),
            "tests": str(self.tests_path),
            "test_responses": str(self.test_responses_path),
            "collection_extension": self.collection_extension,
            "response_extension": self.response_extension,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
