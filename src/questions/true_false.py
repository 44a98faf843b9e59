"""
True/False question handler.

Binary choice questions. Respondent answers T/F (or true/false) to a
statement; answers are stored as "True" / "False".
"""

from __future__ import annotations

from collections.abc import Sequence

from src.core.errors import InvalidFormatError

from . import QuestionKind, register
from .base import BaseQuestionHandler, QuestionTally
from .models import Question

TRUE_SPELLINGS = {"t", "true"}
FALSE_SPELLINGS = {"f", "false"}


def parse_bool(raw: str) -> bool | None:
    """t/true -> True, f/false -> False (case-insensitive); anything else -> None."""
    value = raw.strip().lower()
    if value in TRUE_SPELLINGS:
        return True
    if value in FALSE_SPELLINGS:
        return False
    return None


@register(QuestionKind.TRUE_FALSE)
class TrueFalseHandler(BaseQuestionHandler):
    """Handler for true/false questions."""

    kind = QuestionKind.TRUE_FALSE.value

    def render(self, question: Question) -> str:
        return f"{question.prompt}\n(T/F)"

    def answer_label(self, question: Question, position: int) -> str:
        return "Enter T for True or F for False"

    def normalize_one(
        self, question: Question, raw: str, position: int = 0, taken: Sequence[str] = ()
    ) -> str:
        value = parse_bool(raw)
        if value is None:
            raise InvalidFormatError("Invalid input. Please enter 'T' or 'F'.")
        return "True" if value else "False"

    def is_correct(
        self, question: Question, submitted: Sequence[str], correct: Sequence[str]
    ) -> bool:
        if len(submitted) != 1 or len(correct) != 1:
            return False
        user = parse_bool(submitted[0])
        expected = parse_bool(correct[0])
        return user is not None and user == expected

    def tally(self, question: Question, answer_lists: Sequence[Sequence[str]]) -> QuestionTally:
        counts = {"True": 0, "False": 0}
        for answers in answer_lists:
            for raw in answers:
                value = parse_bool(raw)
                if value is None:
                    continue
                counts["True" if value else "False"] += 1
        return QuestionTally(kind=self.kind, respondents=len(answer_lists), counts=counts)

    def describe_answers(self, question: Question, correct: Sequence[str] | None) -> str:
        if not correct:
            return super().describe_answers(question, correct)
        letter = "T" if parse_bool(correct[0]) else "F"
        return f"The correct answer is {letter}"
