"""
Unit tests for the tabulator.
"""

from src.grading import tabulate
from src.questions import build_question
from src.surveys import ResponseSet, Survey


def make_survey():
    survey = Survey(name="Feedback")
    survey.add_question(build_question("true_false", "Was it useful?"))
    survey.add_question(build_question("multiple_choice", "Best part?", choices=["Talks", "Food"]))
    survey.add_question(build_question("essay", "Anything else?"))
    return survey


def responses_for(survey, *answer_sets):
    return [ResponseSet.capture(survey.name, answers) for answers in answer_sets]


class TestTabulate:
    """Summaries across many responses."""

    def test_counts_per_question(self):
        survey = make_survey()
        responses = responses_for(
            survey,
            [["True"], ["A"], ["Great"]],
            [["False"], ["A"], ["Too long"]],
            [["True"], ["B"], [""]],
        )

        tallies = tabulate(survey, responses)

        assert [t.index for t in tallies] == [0, 1, 2]
        assert tallies[0].counts == {"True": 2, "False": 1}
        assert tallies[1].counts == {"A": 2, "B": 1}
        assert tallies[2].responses == ["Great", "Too long", ""]

    def test_is_idempotent_and_pure(self):
        survey = make_survey()
        responses = responses_for(survey, [["True"], ["B"], ["x"]])
        before = [r.model_copy(deep=True) for r in responses]

        first = tabulate(survey, responses)
        second = tabulate(survey, responses)

        assert first == second
        assert responses == before

    def test_one_more_true_increments_only_true(self):
        survey = make_survey()
        responses = responses_for(survey, [["True"], ["A"], ["x"]], [["False"], ["B"], ["y"]])

        before = tabulate(survey, responses)[0].counts
        responses += responses_for(survey, [["True"]])
        after = tabulate(survey, responses)[0].counts

        assert after["True"] == before["True"] + 1
        assert after["False"] == before["False"]

    def test_short_responses_are_skipped_per_question(self):
        survey = make_survey()
        responses = responses_for(survey, [["True"]], [["False"], ["B"]])

        tallies = tabulate(survey, responses)

        assert len(tallies) == 2
        assert tallies[0].respondents == 2
        assert tallies[1].respondents == 1
        assert tallies[1].counts == {"A": 0, "B": 1}

    def test_no_responses(self):
        assert tabulate(make_survey(), []) == []

    def test_tabulates_tests_too(self, sample_test):
        responses = responses_for(sample_test, [["True"], ["B"], ["essay"], ["1999-12-31"]])

        tallies = tabulate(sample_test, responses)

        assert tallies[3].counts == {"1999-12-31": 1}
