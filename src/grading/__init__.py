"""
Grading and tabulation.

Components:
- oracle: GradedQuestion, a question with its correct answers
- grader: score() one response against a test
- tabulator: tabulate() many responses per question
"""

from .grader import GradeReport, round_half_up, score
from .oracle import GradedQuestion
from .tabulator import tabulate

__all__ = [
    "GradeReport",
    "GradedQuestion",
    "round_half_up",
    "score",
    "tabulate",
]
