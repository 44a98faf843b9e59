"""
Surveys and tests.

A Survey is an ordered list of questions; a Test is an ordered list of
GradedQuestion (question + correct answers). Both are created empty, grown
by appending and edited in place by index. Questions are never reordered or
removed. Indexes are 0-based here; the CLI shows them 1-based.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field

from src.core.errors import OutOfRangeError
from src.grading.oracle import GradedQuestion
from src.questions import Question, QuestionEdits, handler_for
from src.surveys.responses import ResponseSet, sanitize_name


class _Collection(BaseModel):
    name: str

    def __len__(self) -> int:
        return len(self.questions)

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self.questions):
            raise OutOfRangeError(
                f"Question number must be between 1 and {len(self.questions)}"
                if self.questions
                else "There are no questions to select"
            )
        return index

    def file_name(self, extension: str = ".json") -> str:
        return f"{sanitize_name(self.name)}{extension}"

    def record(self, answers: Sequence[Sequence[str]]) -> ResponseSet:
        """Wrap one respondent's answers in a timestamped ResponseSet."""
        return ResponseSet.capture(self.name, [list(a) for a in answers])

    def variants(self) -> list[Question]:
        raise NotImplementedError


class Survey(_Collection):
    """An ordered list of questions."""

    entity: Literal["survey"] = "survey"
    questions: list[Question] = Field(default_factory=list)

    def add_question(self, question: Question) -> int:
        """Append a question and return its index."""
        self.questions.append(question)
        return len(self.questions) - 1

    def get(self, index: int) -> Question:
        return self.questions[self._check_index(index)]

    def modify_question(self, index: int, edits: QuestionEdits) -> Question:
        question = self.get(index)
        handler_for(question).modify(question, edits)
        return question

    def variants(self) -> list[Question]:
        return list(self.questions)


class Test(_Collection):
    """An ordered list of questions with correct answers."""

    __test__ = False  # not a pytest test class

    entity: Literal["test"] = "test"
    questions: list[GradedQuestion] = Field(default_factory=list)

    def add_question(
        self, question: Question, correct_answers: Sequence[str] | None = None
    ) -> int:
        """
        Append a question with its correct answers and return its index.

        Correct answers are validated before anything is appended.
        """
        self.questions.append(GradedQuestion.build(question, correct_answers))
        return len(self.questions) - 1

    def get(self, index: int) -> GradedQuestion:
        return self.questions[self._check_index(index)]

    def modify_question(self, index: int, edits: QuestionEdits) -> bool:
        """
        Edit the question at `index`.

        Existing correct answers are kept. Returns True when the edit left
        them stale (their count no longer matches the question), in which
        case the caller should ask for new correct answers.
        """
        graded = self.get(index)
        handler_for(graded.question).modify(graded.question, edits)
        if graded.is_stale:
            logger.warning(
                f"Question {index + 1} of test '{self.name}' now takes "
                f"{graded.question.answer_count} answer(s); its correct answers need updating"
            )
            return True
        return False

    def variants(self) -> list[Question]:
        return [graded.question for graded in self.questions]

    @property
    def essay_count(self) -> int:
        return sum(1 for graded in self.questions if graded.is_essay)

