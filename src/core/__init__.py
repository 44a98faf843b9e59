"""
Core Module - Shared error taxonomy.

All domain modules (questions, grading, surveys, storage) raise errors
from src.core.errors so the CLI can catch a single SurveyError base.
"""

from src.core.errors import (
    AnswerValidationError,
    AssignmentConflictError,
    DuplicateSelectionError,
    InvalidFormatError,
    OutOfRangeError,
    StoreUnavailableError,
    SurveyError,
)

__all__ = [
    "AnswerValidationError",
    "AssignmentConflictError",
    "DuplicateSelectionError",
    "InvalidFormatError",
    "OutOfRangeError",
    "StoreUnavailableError",
    "SurveyError",
]
