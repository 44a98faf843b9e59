"""
Matching question handler.

Respondent matches each lettered left item with a numbered right item.
Each pair is stored as "A-2". Within one submission every letter appears
exactly once and every number at most once.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from src.core.errors import AssignmentConflictError, InvalidFormatError, OutOfRangeError

from . import QuestionKind, register
from .base import AssignmentCount, BaseQuestionHandler, QuestionEdits, QuestionTally, same_answer_set
from .models import Question, index_for, letter_for

PAIR_CODE = re.compile(r"^([A-Z])\s*-\s*([0-9]+)$")
NUMBER = re.compile(r"^[0-9]+$")


def split_pair(code: str) -> tuple[str, str]:
    """'a-2' -> ('A', '2'); malformed codes come back as (code, '')."""
    letter, sep, number = code.strip().upper().partition("-")
    if not sep:
        return code.strip().upper(), ""
    return letter.strip(), number.strip()


def canonical_key(answers: Sequence[str]) -> str:
    """Upper-cased pairs sorted by letter, joined with '|'."""
    pairs = sorted((a.strip().upper() for a in answers), key=lambda p: split_pair(p)[0])
    return "|".join(pairs)


@register(QuestionKind.MATCHING)
class MatchingHandler(BaseQuestionHandler):
    """Handler for matching questions."""

    kind = QuestionKind.MATCHING.value
    editable = frozenset({"prompt", "left_items", "right_items"})

    def render(self, question: Question) -> str:
        width = max(len(item) for item in question.left_items)
        lines = [question.prompt, "Match the following items:"]
        for i, (left, right) in enumerate(zip(question.left_items, question.right_items)):
            lines.append(f"{letter_for(i)}) {left:<{width}}   {i + 1}) {right}")
        return "\n".join(lines)

    def answer_label(self, question: Question, position: int) -> str:
        return f"{letter_for(position)} -> [1-{question.size}]"

    def normalize_one(
        self, question: Question, raw: str, position: int = 0, taken: Sequence[str] = ()
    ) -> str:
        value = raw.strip().upper()
        if NUMBER.match(value):
            # Bare number during capture: pairs with the letter being asked
            letter, number = letter_for(position), value
        else:
            match = PAIR_CODE.match(value)
            if not match:
                raise InvalidFormatError(f"Invalid match {raw!r}. Use the form A-1.")
            letter, number = match.groups()

        n = question.size
        if not 0 <= index_for(letter) < n:
            raise InvalidFormatError(f"Invalid letter {letter}. Please use A to {letter_for(n - 1)}.")
        if not 1 <= int(number) <= n:
            raise InvalidFormatError(f"Please enter a number between 1 and {n}.")

        used = [split_pair(code) for code in taken]
        if any(used_letter == letter for used_letter, _ in used):
            raise InvalidFormatError(f"Item {letter} has already been matched.")
        if any(NUMBER.match(used_number) and int(used_number) == int(number) for _, used_number in used):
            raise AssignmentConflictError(
                "That number has already been used. Please choose a different number."
            )
        return f"{letter}-{int(number)}"

    def normalize(self, question: Question, answers: Sequence[str]) -> list[str]:
        normalized = super().normalize(question, answers)
        return sorted(normalized, key=lambda code: split_pair(code)[0])

    def _plan_edits(self, question: Question, edits: QuestionEdits) -> dict[str, Any]:
        left = list(question.left_items)
        right = list(question.right_items)
        for letter, text in edits.left_items.items():
            index = index_for(letter)
            if not 0 <= index < len(left):
                raise OutOfRangeError(f"Invalid left item letter {letter!r}")
            left[index] = text
        for number, text in edits.right_items.items():
            if not 1 <= number <= len(right):
                raise OutOfRangeError(f"Invalid right item number {number}")
            right[number - 1] = text
        # answer_count always resets to the item count after an edit
        return {"left_items": left, "right_items": right, "answer_count": len(left)}

    def is_correct(
        self, question: Question, submitted: Sequence[str], correct: Sequence[str]
    ) -> bool:
        return same_answer_set(submitted, correct, str.upper)

    def tally(self, question: Question, answer_lists: Sequence[Sequence[str]]) -> QuestionTally:
        assignments: dict[str, AssignmentCount] = {}
        for answers in answer_lists:
            key = canonical_key(answers)
            if key not in assignments:
                pairs = [split_pair(code) for code in key.split("|")] if key else []
                assignments[key] = AssignmentCount(key=key, count=0, pairs=pairs)
            assignments[key].count += 1
        return QuestionTally(
            kind=self.kind,
            respondents=len(answer_lists),
            assignments=list(assignments.values()),
        )

    def describe_answers(self, question: Question, correct: Sequence[str] | None) -> str:
        if not correct:
            return super().describe_answers(question, correct)
        lines = ["The correct matches are:"]
        for code in correct:
            letter, number = split_pair(code)
            lines.append(f"{letter} -> {number}" if number else code)
        return "\n".join(lines)
