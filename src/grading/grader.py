"""
Automatic grading of one response against a test.

Every question is worth the same share of 100 points. Essays count towards
the total but cannot be auto-graded, so the report also says how many of
the 100 points were gradable at all.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from src.surveys import ResponseSet, Test


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


@dataclass
class GradeReport:
    """Result of grading one response."""
    correct_count: int
    total_questions: int
    essay_count: int

    @property
    def point_value(self) -> float:
        """Points per question."""
        if self.total_questions == 0:
            return 0.0
        return 100 / self.total_questions

    @property
    def grade(self) -> int:
        return round_half_up(self.correct_count * self.point_value)

    @property
    def auto_gradable_points(self) -> int:
        return round_half_up((self.total_questions - self.essay_count) * self.point_value)

    def summary(self) -> str:
        """One-line description of the grade for display."""
        essays = "was 1 essay question" if self.essay_count == 1 else f"were {self.essay_count} essay questions"
        return (
            f"You received a {self.grade} on the test. The test was worth 100 points, "
            f"but only {self.auto_gradable_points} of those points could be auto graded "
            f"because there {essays}."
        )


def score(test: Test, response: ResponseSet) -> GradeReport:
    """
    Grade `response` against `test`.

    Questions and answers are paired by position up to the shorter of the
    two; essays are skipped. A response with fewer answers than the test has
    questions simply scores nothing for the missing ones.
    """
    correct = 0
    for index, graded in enumerate(test.questions[: len(response.answers)]):
        if graded.is_essay:
            continue
        if graded.is_correct(response.answers_for(index)):
            correct += 1

    report = GradeReport(
        correct_count=correct,
        total_questions=len(test.questions),
        essay_count=test.essay_count,
    )
    logger.debug(
        f"Graded response to '{test.name}': {report.correct_count}/{report.total_questions} "
        f"correct, grade {report.grade}"
    )
    return report
