"""
Base protocol and types for question handlers.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Protocol

from loguru import logger

from src.core.errors import InvalidFormatError, OutOfRangeError

from .models import Question


@dataclass
class QuestionEdits:
    """
    Partial update for a question.

    Only fields that are set are applied. Which fields a kind accepts is
    decided by its handler; anything else is rejected with OutOfRangeError.
    """
    prompt: str | None = None
    answer_count: int | None = None
    choices: dict[str, str] = field(default_factory=dict)  # letter -> text
    left_items: dict[str, str] = field(default_factory=dict)  # letter -> text
    right_items: dict[int, str] = field(default_factory=dict)  # number -> text

    def requested(self) -> set[str]:
        """Names of the fields this edit touches."""
        names = set()
        if self.prompt is not None:
            names.add("prompt")
        if self.answer_count is not None:
            names.add("answer_count")
        for name in ("choices", "left_items", "right_items"):
            if getattr(self, name):
                names.add(name)
        return names


@dataclass
class AssignmentCount:
    """One distinct matching assignment and how many respondents gave it."""
    key: str  # "A-1|B-2|C-3"
    count: int
    pairs: list[tuple[str, str]]  # [("A", "1"), ...]


@dataclass
class QuestionTally:
    """
    Summary of one question across a population of responses.

    Which fields are filled depends on the kind:
    - counts: true/false, multiple-choice, short-answer, date
    - responses: essay
    - assignments: matching
    """
    kind: str
    respondents: int = 0
    index: int = 0
    counts: dict[str, int] = field(default_factory=dict)
    responses: list[str] = field(default_factory=list)
    assignments: list[AssignmentCount] = field(default_factory=list)


class QuestionHandler(Protocol):
    """Protocol for question kind handlers."""

    kind: str
    editable: frozenset[str]

    def render(self, question: Question) -> str:
        """Display text for the question."""
        ...

    def answer_label(self, question: Question, position: int) -> str:
        """Prompt label for the answer at `position` during capture."""
        ...

    def normalize_one(
        self, question: Question, raw: str, position: int = 0, taken: Sequence[str] = ()
    ) -> str:
        """Validate and normalize a single answer given the answers already taken."""
        ...

    def normalize(self, question: Question, answers: Sequence[str]) -> list[str]:
        """Validate and normalize a complete answer set."""
        ...

    def modify(self, question: Question, edits: QuestionEdits) -> None:
        """Apply a partial configuration update in place."""
        ...

    def is_correct(
        self, question: Question, submitted: Sequence[str], correct: Sequence[str]
    ) -> bool:
        """Judge a submitted answer set against the correct answers."""
        ...

    def tally(self, question: Question, answer_lists: Sequence[Sequence[str]]) -> QuestionTally:
        """Summarize the answer sets of many respondents."""
        ...

    def describe_answers(self, question: Question, correct: Sequence[str] | None) -> str:
        """Human-readable statement of the correct answers."""
        ...


class BaseQuestionHandler:
    """
    Shared behaviour for question handlers.

    Subclasses set `kind`, `editable` and implement normalize_one(),
    is_correct() and tally(). Edits are planned first and applied only when
    every part validated, so a failed edit never leaves a question
    half-modified.
    """

    kind: ClassVar[str] = ""
    editable: ClassVar[frozenset[str]] = frozenset({"prompt"})

    def render(self, question: Question) -> str:
        return question.prompt

    def answer_label(self, question: Question, position: int) -> str:
        if question.answer_count > 1:
            return f"Answer {position + 1}"
        return "Answer"

    def normalize_one(
        self, question: Question, raw: str, position: int = 0, taken: Sequence[str] = ()
    ) -> str:
        return raw

    def normalize(self, question: Question, answers: Sequence[str]) -> list[str]:
        answers = list(answers)
        if len(answers) != question.answer_count:
            raise InvalidFormatError(
                f"Expected {question.answer_count} answer(s), got {len(answers)}"
            )
        normalized: list[str] = []
        for position, raw in enumerate(answers):
            normalized.append(self.normalize_one(question, raw, position, normalized))
        return normalized

    def modify(self, question: Question, edits: QuestionEdits) -> None:
        unsupported = edits.requested() - self.editable
        if unsupported:
            raise OutOfRangeError(
                f"{self.kind} questions do not support editing: {', '.join(sorted(unsupported))}"
            )

        updates = self._plan_edits(question, edits)
        if edits.prompt is not None:
            updates["prompt"] = edits.prompt

        for name, value in updates.items():
            setattr(question, name, value)
        if updates:
            logger.debug(f"Modified {self.kind} question: {sorted(updates)}")

    def _plan_edits(self, question: Question, edits: QuestionEdits) -> dict[str, Any]:
        """Validate kind-specific edits and return the field updates to apply."""
        return {}

    def _plan_answer_count(self, requested: int, maximum: int | None = None) -> int:
        if requested < 1:
            raise OutOfRangeError("The number of responses must be at least 1")
        if maximum is not None and requested > maximum:
            raise OutOfRangeError(f"The number of responses must be between 1 and {maximum}")
        return requested

    def is_correct(
        self, question: Question, submitted: Sequence[str], correct: Sequence[str]
    ) -> bool:
        return False

    def tally(self, question: Question, answer_lists: Sequence[Sequence[str]]) -> QuestionTally:
        return QuestionTally(kind=self.kind, respondents=len(answer_lists))

    def describe_answers(self, question: Question, correct: Sequence[str] | None) -> str:
        if not correct:
            return "(No automatic grading for this question)"
        if len(correct) == 1:
            return f"The correct answer is {correct[0]}"
        return f"The correct answers are {', '.join(correct)}"


def count_in_order(values: Sequence[str]) -> dict[str, int]:
    """Frequency table keyed by value, in first-seen order."""
    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return counts


def same_answer_set(submitted: Sequence[str], correct: Sequence[str], fold) -> bool:
    """Order-independent comparison after trimming and applying `fold`."""
    return {fold(a.strip()) for a in submitted} == {fold(a.strip()) for a in correct}
