"""
Date question handler.

Answers must be real calendar dates in ISO YYYY-MM-DD form.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date

from src.core.errors import InvalidFormatError

from . import QuestionKind, register
from .base import BaseQuestionHandler, QuestionTally, count_in_order, same_answer_set
from .models import Question

ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def parse_iso_date(raw: str) -> date | None:
    """Parse YYYY-MM-DD strictly; None if malformed or not a real date."""
    value = raw.strip()
    if not ISO_DATE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


@register(QuestionKind.DATE)
class DateHandler(BaseQuestionHandler):
    """Handler for date questions."""

    kind = QuestionKind.DATE.value

    def render(self, question: Question) -> str:
        return f"{question.prompt}\n(Please enter a date in YYYY-MM-DD format)"

    def answer_label(self, question: Question, position: int) -> str:
        return "Enter date (YYYY-MM-DD)"

    def normalize_one(
        self, question: Question, raw: str, position: int = 0, taken: Sequence[str] = ()
    ) -> str:
        if parse_iso_date(raw) is None:
            raise InvalidFormatError("Invalid date format. Please use YYYY-MM-DD.")
        return raw.strip()

    def is_correct(
        self, question: Question, submitted: Sequence[str], correct: Sequence[str]
    ) -> bool:
        if len(submitted) != len(correct):
            return False
        return same_answer_set(submitted, correct, str)

    def tally(self, question: Question, answer_lists: Sequence[Sequence[str]]) -> QuestionTally:
        values = [raw.strip() for answers in answer_lists for raw in answers]
        return QuestionTally(
            kind=self.kind,
            respondents=len(answer_lists),
            counts=count_in_order(values),
        )
