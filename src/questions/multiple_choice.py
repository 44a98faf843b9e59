"""
Multiple choice question handler.

- Presents a prompt with lettered choices (A, B, C, ...).
- Respondent selects `answer_count` distinct letters.
- Grading compares the set of selected letters with the correct set.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from src.core.errors import DuplicateSelectionError, InvalidFormatError, OutOfRangeError

from . import QuestionKind, register
from .base import BaseQuestionHandler, QuestionEdits, QuestionTally, same_answer_set
from .models import Question, index_for, letter_for


@register(QuestionKind.MULTIPLE_CHOICE)
class MultipleChoiceHandler(BaseQuestionHandler):
    """Handler for multiple choice questions."""

    kind = QuestionKind.MULTIPLE_CHOICE.value
    editable = frozenset({"prompt", "choices", "answer_count"})

    def render(self, question: Question) -> str:
        lines = [question.prompt]
        for i, choice in enumerate(question.choices):
            lines.append(f"{letter_for(i)}) {choice}")
        if question.answer_count > 1:
            lines.append(f"(Select {question.answer_count} distinct choices)")
        return "\n".join(lines)

    def answer_label(self, question: Question, position: int) -> str:
        return f"Choice {position + 1} [A-{question.last_letter}]"

    def normalize_one(
        self, question: Question, raw: str, position: int = 0, taken: Sequence[str] = ()
    ) -> str:
        letter = raw.strip().upper()
        if len(letter) != 1:
            raise InvalidFormatError("Please enter a single letter corresponding to a choice.")
        index = index_for(letter)
        if not 0 <= index < len(question.choices):
            raise InvalidFormatError(
                f"Invalid choice. Please enter a letter between A and {question.last_letter}."
            )
        if letter in taken:
            raise DuplicateSelectionError(
                f"Choice {letter} was already selected. Please choose a different option."
            )
        return letter

    def _plan_edits(self, question: Question, edits: QuestionEdits) -> dict[str, Any]:
        updates: dict[str, Any] = {}
        if edits.choices:
            choices = list(question.choices)
            for letter, text in edits.choices.items():
                index = index_for(letter)
                if not 0 <= index < len(choices):
                    raise OutOfRangeError(
                        f"Invalid choice letter {letter!r}; choose between A and {question.last_letter}"
                    )
                choices[index] = text
            updates["choices"] = choices
        if edits.answer_count is not None:
            updates["answer_count"] = self._plan_answer_count(
                edits.answer_count, len(question.choices)
            )
        return updates

    def is_correct(
        self, question: Question, submitted: Sequence[str], correct: Sequence[str]
    ) -> bool:
        return same_answer_set(submitted, correct, str.upper)

    def tally(self, question: Question, answer_lists: Sequence[Sequence[str]]) -> QuestionTally:
        counts = {letter_for(i): 0 for i in range(len(question.choices))}
        for answers in answer_lists:
            for raw in answers:
                letter = raw.strip().upper()
                # letters outside the choice range are not reported
                if letter in counts:
                    counts[letter] += 1
        return QuestionTally(kind=self.kind, respondents=len(answer_lists), counts=counts)

    def describe_answers(self, question: Question, correct: Sequence[str] | None) -> str:
        if not correct:
            return super().describe_answers(question, correct)
        parts = []
        for answer in correct:
            letter = answer.strip().upper()
            index = index_for(letter)
            if 0 <= index < len(question.choices):
                parts.append(f"{letter}) {question.choices[index]}")
            else:
                parts.append(f"{letter})")
        if len(parts) == 1:
            return f"The correct choice is {parts[0]}"
        return f"The correct choices are {', '.join(parts)}"
