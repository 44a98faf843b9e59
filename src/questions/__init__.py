"""
Question kind handlers.

Each question kind (true/false, multiple choice, matching, etc.) has its own
module with:
- render(): Display text for the question
- normalize(): Validate and normalize a respondent's answers
- modify(): Apply a configuration edit
- is_correct(): Judge answers against the correct ones
- tally(): Summarize many respondents' answers
"""

from typing import TYPE_CHECKING

from .models import (
    QUESTION_ADAPTER,
    DateQuestion,
    EssayQuestion,
    MatchingQuestion,
    MultipleChoiceQuestion,
    Question,
    QuestionKind,
    ShortAnswerQuestion,
    TrueFalseQuestion,
    build_question,
    index_for,
    letter_for,
)

if TYPE_CHECKING:
    from .base import QuestionHandler


# Handler registry - populated by @register decorator
HANDLERS: dict[QuestionKind, "QuestionHandler"] = {}


def register(kind: QuestionKind):
    """Decorator to register a question handler."""
    def decorator(cls):
        HANDLERS[kind] = cls()
        return cls
    return decorator


def get_handler(kind: "str | QuestionKind") -> "QuestionHandler | None":
    """Get the handler for a question kind."""
    if isinstance(kind, str) and not isinstance(kind, QuestionKind):
        try:
            kind = QuestionKind(kind.lower())
        except ValueError:
            return None
    return HANDLERS.get(kind)


def handler_for(question: Question) -> "QuestionHandler":
    """Handler for a question instance; every kind is registered."""
    return HANDLERS[QuestionKind(question.kind)]


# Import handlers to trigger registration
from . import true_false
from . import multiple_choice
from . import short_answer
from . import essay
from . import date_question
from . import matching

from .base import AssignmentCount, QuestionEdits, QuestionTally

__all__ = [
    "AssignmentCount",
    "DateQuestion",
    "EssayQuestion",
    "HANDLERS",
    "MatchingQuestion",
    "MultipleChoiceQuestion",
    "QUESTION_ADAPTER",
    "Question",
    "QuestionEdits",
    "QuestionKind",
    "QuestionTally",
    "ShortAnswerQuestion",
    "TrueFalseQuestion",
    "build_question",
    "get_handler",
    "handler_for",
    "index_for",
    "letter_for",
    "register",
]
