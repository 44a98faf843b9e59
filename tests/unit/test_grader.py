"""
Unit tests for the grader.
"""

import pytest

from src.grading import GradeReport, round_half_up, score
from src.surveys import ResponseSet, Test


def respond(test, answers):
    return ResponseSet.capture(test.name, answers)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(0.5, 1), (1.5, 2), (2.5, 3), (66.666, 67), (33.333, 33), (0.0, 0)],
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestScore:
    """Grading one response against a test."""

    def test_two_of_three_gradable_correct(self, sample_test):
        response = respond(sample_test, [["True"], ["A"], ["An essay"], ["1999-12-31"]])

        report = score(sample_test, response)

        assert report.correct_count == 2
        assert report.total_questions == 4
        assert report.essay_count == 1
        assert report.point_value == 25
        assert report.grade == 50
        assert report.auto_gradable_points == 75

    def test_all_correct(self, sample_test):
        response = respond(sample_test, [["t"], ["b"], ["x"], ["1999-12-31"]])

        assert score(sample_test, response).grade == 75

    def test_short_response_scores_missing_questions_as_wrong(self, sample_test):
        response = respond(sample_test, [["True"]])

        report = score(sample_test, response)

        assert report.correct_count == 1
        assert report.grade == 25

    def test_empty_test(self):
        test = Test(name="Empty")

        report = score(test, respond(test, []))

        assert report.point_value == 0
        assert report.grade == 0
        assert report.auto_gradable_points == 0

    def test_rounds_thirds(self):
        report = GradeReport(correct_count=2, total_questions=3, essay_count=0)

        assert report.grade == 67
        assert report.auto_gradable_points == 100


class TestSummary:
    def test_one_essay(self):
        report = GradeReport(correct_count=2, total_questions=4, essay_count=1)

        assert report.summary() == (
            "You received a 50 on the test. The test was worth 100 points, but only 75 "
            "of those points could be auto graded because there was 1 essay question."
        )

    def test_several_essays(self):
        report = GradeReport(correct_count=1, total_questions=4, essay_count=2)

        assert report.summary().endswith("because there were 2 essay questions.")
