"""
Essay question handler.

Free-form multi-line answers. Essays are never auto-graded and are not
aggregated: tabulation lists every response verbatim.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from . import QuestionKind, register
from .base import BaseQuestionHandler, QuestionEdits, QuestionTally
from .models import Question


@register(QuestionKind.ESSAY)
class EssayHandler(BaseQuestionHandler):
    """Handler for essay questions."""

    kind = QuestionKind.ESSAY.value
    editable = frozenset({"prompt", "answer_count"})

    def answer_label(self, question: Question, position: int) -> str:
        return f"Essay response {position + 1} (finish with a blank line)"

    def normalize_one(
        self, question: Question, raw: str, position: int = 0, taken: Sequence[str] = ()
    ) -> str:
        return raw.strip()

    def _plan_edits(self, question: Question, edits: QuestionEdits) -> dict[str, Any]:
        if edits.answer_count is None:
            return {}
        return {"answer_count": self._plan_answer_count(edits.answer_count)}

    def tally(self, question: Question, answer_lists: Sequence[Sequence[str]]) -> QuestionTally:
        responses = [answer for answers in answer_lists for answer in answers]
        return QuestionTally(kind=self.kind, respondents=len(answer_lists), responses=responses)
