"""
Workspace: the four entity stores the CLI works with.

Surveys, tests and their responses live in separate directories, all
configured through Settings (see config.py).
"""

from __future__ import annotations

from dataclasses import dataclass

from config import Settings, get_settings

from .entities import EntityStore
from .store import DirectoryBlobStore


@dataclass
class Workspace:
    """Stores for one data directory."""

    surveys: EntityStore
    survey_responses: EntityStore
    tests: EntityStore
    test_responses: EntityStore
    collection_extension: str = ".json"
    response_extension: str = ".resp"

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Workspace:
        settings = settings or get_settings()
        return cls(
            surveys=EntityStore(DirectoryBlobStore(settings.surveys_path)),
            survey_responses=EntityStore(DirectoryBlobStore(settings.survey_responses_path)),
            tests=EntityStore(DirectoryBlobStore(settings.tests_path)),
            test_responses=EntityStore(DirectoryBlobStore(settings.test_responses_path)),
            collection_extension=settings.collection_extension,
            response_extension=settings.response_extension,
        )
