"""
Error taxonomy for surveys, tests and their stores.

Every error raised on purpose by this package derives from SurveyError.
Answer and configuration errors are retryable: the caller re-prompts or
re-submits. None of them leaves a question or oracle half-modified.
"""

from __future__ import annotations


class SurveyError(Exception):
    """Base class for all survey/test errors."""
    pass


class AnswerValidationError(SurveyError, ValueError):
    """An answer failed the question's validation rule."""
    pass


class InvalidFormatError(AnswerValidationError):
    """Answer does not parse under the question kind's format rule."""
    pass


class DuplicateSelectionError(AnswerValidationError):
    """A multiple-choice letter was selected more than once."""
    pass


class AssignmentConflictError(AnswerValidationError):
    """A matching number was assigned to more than one letter."""
    pass


class OutOfRangeError(SurveyError, ValueError):
    """Configuration value outside its legal bounds, or an unsupported edit."""
    pass


class StoreUnavailableError(SurveyError):
    """Loading or saving through the store failed."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key
