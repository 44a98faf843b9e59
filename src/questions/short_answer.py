"""
Short answer question handler.

Each answer is a single line of text. Grading is an exact,
case-insensitive, order-independent match against the correct answers.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from src.core.errors import InvalidFormatError

from . import QuestionKind, register
from .base import BaseQuestionHandler, QuestionEdits, QuestionTally, count_in_order, same_answer_set
from .models import Question


@register(QuestionKind.SHORT_ANSWER)
class ShortAnswerHandler(BaseQuestionHandler):
    """Handler for short answer questions."""

    kind = QuestionKind.SHORT_ANSWER.value
    editable = frozenset({"prompt", "answer_count"})

    def render(self, question: Question) -> str:
        if question.answer_count > 1:
            return f"{question.prompt}\n({question.answer_count} answers)"
        return question.prompt

    def normalize_one(
        self, question: Question, raw: str, position: int = 0, taken: Sequence[str] = ()
    ) -> str:
        if "\n" in raw or "\r" in raw:
            raise InvalidFormatError("Short answers must fit on a single line.")
        return raw

    def _plan_edits(self, question: Question, edits: QuestionEdits) -> dict[str, Any]:
        if edits.answer_count is None:
            return {}
        return {"answer_count": self._plan_answer_count(edits.answer_count)}

    def is_correct(
        self, question: Question, submitted: Sequence[str], correct: Sequence[str]
    ) -> bool:
        return same_answer_set(submitted, correct, str.lower)

    def tally(self, question: Question, answer_lists: Sequence[Sequence[str]]) -> QuestionTally:
        # Literal text matters for review: no case folding here
        values = [raw.strip() for answers in answer_lists for raw in answers]
        return QuestionTally(
            kind=self.kind,
            respondents=len(answer_lists),
            counts=count_in_order(values),
        )
