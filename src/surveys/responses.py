"""
Response records.

A ResponseSet is one respondent's answers to a survey or test, stamped with
the time it was captured. It keeps the subject's name rather than a
reference to the survey; records are matched back to a survey by name only.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def sanitize_name(name: str) -> str:
    """Replace every character outside [A-Za-z0-9_-] with '_'."""
    return UNSAFE_NAME_CHARS.sub("_", name)


def response_prefix(subject_name: str) -> str:
    """Key prefix shared by all responses to a subject."""
    return f"{sanitize_name(subject_name)}_"


class ResponseSet(BaseModel):
    """One respondent's full set of answers."""

    model_config = ConfigDict(frozen=True)

    entity: Literal["response_set"] = "response_set"
    subject_name: str
    answers: tuple[tuple[str, ...], ...]
    captured_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def capture(cls, subject_name: str, answers: list[list[str]]) -> ResponseSet:
        """Create a record stamped with the current time."""
        return cls(
            subject_name=subject_name,
            answers=tuple(tuple(answer) for answer in answers),
        )

    def answers_for(self, index: int) -> list[str] | None:
        """Answers to question `index`, or None if this record is too short."""
        if 0 <= index < len(self.answers):
            return list(self.answers[index])
        return None

    def file_name(self, extension: str = ".resp") -> str:
        """<sanitized-subject>_<YYYYMMDD_HHmmss><extension>"""
        stamp = self.captured_at.strftime(TIMESTAMP_FORMAT)
        return f"{response_prefix(self.subject_name)}{stamp}{extension}"
