"""
Correctness oracle: a question paired with its correct answer(s).

Essays never carry correct answers and are never auto-graded. For every
other kind the correct answers are normalized through the question's own
handler when they are set, so they always have the shape a respondent's
answers would have.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger
from pydantic import BaseModel, model_validator

from src.core.errors import InvalidFormatError
from src.questions import Question, QuestionKind, handler_for


class GradedQuestion(BaseModel):
    """A question plus the answers that count as correct."""

    question: Question
    correct_answers: list[str] | None = None

    @model_validator(mode="after")
    def _essays_have_no_answers(self) -> GradedQuestion:
        if self.is_essay and self.correct_answers is not None:
            raise ValueError("Essay questions cannot have correct answers")
        return self

    @classmethod
    def build(cls, question: Question, correct_answers: Sequence[str] | None = None) -> GradedQuestion:
        """Wrap a question, validating its correct answers."""
        graded = cls(question=question)
        if correct_answers is not None or not graded.is_essay:
            graded.set_correct_answers(correct_answers)
        return graded

    @property
    def is_essay(self) -> bool:
        return self.question.kind == QuestionKind.ESSAY.value

    @property
    def is_stale(self) -> bool:
        """Correct answers no longer fit the question's answer count."""
        if self.correct_answers is None:
            return False
        return len(self.correct_answers) != self.question.answer_count

    def set_correct_answers(self, answers: Sequence[str] | None) -> None:
        """
        Replace the correct answers.

        Raises:
            InvalidFormatError: answers given for an essay, omitted for any
                other kind, or not valid for the question
            DuplicateSelectionError / AssignmentConflictError: from the
                question's own validation
        """
        if answers is None:
            if not self.is_essay:
                raise InvalidFormatError("Correct answers are required for auto-graded questions")
            self.correct_answers = None
            return
        if self.is_essay:
            raise InvalidFormatError("Essay questions are not auto-graded")

        normalized = handler_for(self.question).normalize(self.question, answers)
        self.correct_answers = normalized
        logger.debug(f"Correct answers set for {self.question.kind}: {normalized}")

    def is_correct(self, submitted: Sequence[str] | None) -> bool:
        """True when the submitted answers match; always False for essays."""
        if self.is_essay or self.correct_answers is None or submitted is None:
            return False
        return handler_for(self.question).is_correct(
            self.question, list(submitted), self.correct_answers
        )

    def describe_answers(self) -> str:
        return handler_for(self.question).describe_answers(self.question, self.correct_answers)
