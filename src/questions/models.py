"""
Question variant models.

The six question kinds form a closed tagged union: every model carries a
literal ``kind`` field and pydantic picks the concrete class from it when a
question is loaded back from storage. Behaviour for each kind lives in its
handler module (see src.questions.HANDLERS), keyed by the same tag.
"""

from __future__ import annotations

import string
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, model_validator

from src.core.errors import OutOfRangeError

LETTERS = string.ascii_uppercase
MAX_ITEMS = len(LETTERS)


class QuestionKind(str, Enum):
    """Supported question kinds."""
    TRUE_FALSE = "true_false"
    MULTIPLE_CHOICE = "multiple_choice"
    SHORT_ANSWER = "short_answer"
    ESSAY = "essay"
    DATE = "date"
    MATCHING = "matching"


def letter_for(index: int) -> str:
    """0 -> 'A', 1 -> 'B', ..."""
    return LETTERS[index]


def index_for(letter: str) -> int:
    """'A' -> 0; returns -1 for anything that is not a single letter."""
    letter = letter.strip().upper()
    if len(letter) != 1 or letter not in LETTERS:
        return -1
    return LETTERS.index(letter)


class BaseQuestion(BaseModel):
    """Fields shared by every question kind."""

    prompt: str
    answer_count: int = Field(default=1, ge=1)

    @property
    def auto_gradable(self) -> bool:
        return self.kind != QuestionKind.ESSAY.value


class TrueFalseQuestion(BaseQuestion):
    kind: Literal["true_false"] = "true_false"

    @model_validator(mode="after")
    def _single_answer(self) -> TrueFalseQuestion:
        if self.answer_count != 1:
            raise ValueError("True/False questions take exactly one answer")
        return self


class MultipleChoiceQuestion(BaseQuestion):
    kind: Literal["multiple_choice"] = "multiple_choice"
    choices: list[str]

    @model_validator(mode="after")
    def _check_choices(self) -> MultipleChoiceQuestion:
        if not 2 <= len(self.choices) <= MAX_ITEMS:
            raise ValueError(f"A multiple-choice question needs between 2 and {MAX_ITEMS} choices")
        if self.answer_count > len(self.choices):
            raise ValueError(
                f"Number of selections must be between 1 and {len(self.choices)}"
            )
        return self

    @property
    def last_letter(self) -> str:
        return letter_for(len(self.choices) - 1)


class ShortAnswerQuestion(BaseQuestion):
    kind: Literal["short_answer"] = "short_answer"


class EssayQuestion(BaseQuestion):
    kind: Literal["essay"] = "essay"


class DateQuestion(BaseQuestion):
    kind: Literal["date"] = "date"

    @model_validator(mode="after")
    def _single_answer(self) -> DateQuestion:
        if self.answer_count != 1:
            raise ValueError("Date questions take exactly one answer")
        return self


class MatchingQuestion(BaseQuestion):
    kind: Literal["matching"] = "matching"
    left_items: list[str]
    right_items: list[str]
    answer_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_items(self) -> MatchingQuestion:
        if len(self.left_items) != len(self.right_items):
            raise ValueError("Left and right items must be the same size")
        if not 2 <= len(self.left_items) <= MAX_ITEMS:
            raise ValueError(f"A matching question needs between 2 and {MAX_ITEMS} pairs")
        # answer_count always tracks the item count
        self.answer_count = len(self.left_items)
        return self

    @property
    def size(self) -> int:
        return len(self.left_items)


Question = Annotated[
    Union[
        TrueFalseQuestion,
        MultipleChoiceQuestion,
        ShortAnswerQuestion,
        EssayQuestion,
        DateQuestion,
        MatchingQuestion,
    ],
    Field(discriminator="kind"),
]

QUESTION_ADAPTER: TypeAdapter[Question] = TypeAdapter(Question)


def build_question(
    kind: str | QuestionKind,
    prompt: str,
    *,
    answer_count: int | None = None,
    choices: list[str] | None = None,
    left_items: list[str] | None = None,
    right_items: list[str] | None = None,
) -> Question:
    """
    Create a question of the given kind.

    Raises:
        OutOfRangeError: if the configuration breaks the kind's invariants
    """
    data: dict = {"kind": QuestionKind(kind).value, "prompt": prompt}
    if answer_count is not None:
        data["answer_count"] = answer_count
    if choices is not None:
        data["choices"] = list(choices)
    if left_items is not None:
        data["left_items"] = list(left_items)
    if right_items is not None:
        data["right_items"] = list(right_items)

    try:
        return QUESTION_ADAPTER.validate_python(data)
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise OutOfRangeError(messages) from e
