"""
Integration Tests for the survey and test workflows.

Drives SurveyorSession end to end with scripted input:
1. Author a survey / test through the menus
2. Save and reload it from a data directory
3. Take it, tabulate the stored responses and grade a test

Runs against real files under a temporary directory.
"""

import io

import pytest
from rich.console import Console

from config import Settings
from src.cli.capture import ScriptedAnswerSource
from src.cli.session import SurveyorSession
from src.questions import build_question
from src.storage import Workspace
from src.surveys import Survey, Test

pytestmark = pytest.mark.integration


@pytest.fixture
def workspace(tmp_path):
    return Workspace.from_settings(Settings(data_dir=tmp_path, _env_file=None))


def make_session(workspace, lines):
    console = Console(file=io.StringIO(), width=200)
    return SurveyorSession(workspace, console=console, source=ScriptedAnswerSource(lines))


def output_of(session):
    return session.console.file.getvalue()


class TestSurveyFlow:
    """Create, save, take and tabulate a survey."""

    def test_create_and_save_survey(self, workspace):
        session = make_session(
            workspace,
            [
                "Team Lunch",
                "1", "Pizza is acceptable.",
                "5", "Best date?",
                "7",
                "",
            ],
        )

        survey = session.create("survey")
        key = session.save("survey")

        assert isinstance(survey, Survey)
        assert len(survey) == 2
        assert key == "Team_Lunch.json"
        assert workspace.surveys.load(key, Survey) == survey

    def test_take_and_tabulate(self, workspace):
        survey = Survey(name="Team Lunch")
        session = make_session(workspace, ["t", "2024-05-01", "f", "2024-05-01"])
        survey.add_question(build_question("true_false", "Pizza is acceptable."))
        survey.add_question(build_question("date", "Best date?"))
        session.survey = survey

        first = session.take("survey")
        second = session.take("survey")

        assert first != second
        assert first.startswith("Team_Lunch_")
        assert session.tabulate("survey") is True
        out = output_of(session)
        assert "Tabulation of Team Lunch" in out
        assert "2024-05-01" in out

    def test_tabulate_without_responses(self, workspace):
        session = make_session(workspace, [])
        session.survey = Survey(name="Nobody")

        assert session.tabulate("survey") is False
        assert "No responses found" in output_of(session)

    def test_actions_need_a_loaded_survey(self, workspace):
        session = make_session(workspace, [])

        assert session.display("survey") is False
        assert "You must have a survey loaded" in output_of(session)

    def test_modify_and_reload(self, workspace):
        survey = Survey(name="Feedback")
        survey.add_question(build_question("short_answer", "Name a color"))
        workspace.surveys.save(survey, "feedback.json")

        session = make_session(workspace, ["y", "Name two colors", "y", "2"])
        session.load("survey", "feedback")
        assert session.modify("survey", 1) is True
        session.save("survey", ask_name=False)

        reloaded = workspace.surveys.load("feedback.json", Survey)
        assert reloaded.questions[0].prompt == "Name two colors"
        assert reloaded.questions[0].answer_count == 2

    def test_menu_loop(self, workspace):
        session = make_session(
            workspace,
            [
                "1",  # Survey
                "1", "Quick Poll", "1", "Coffee?", "7",  # create
                "4", "",  # save under the default name
                "8",  # back
                "3",  # exit
            ],
        )

        session.run()

        assert workspace.surveys.keys() == ["Quick_Poll.json"]

    def test_menu_ends_when_input_runs_out(self, workspace):
        session = make_session(workspace, ["1"])

        session.run()

        assert session.survey is None


class TestTestFlow:
    """Create, take and grade a test."""

    def test_create_take_grade(self, workspace):
        author = make_session(
            workspace,
            [
                "Quiz",
                "1", "The earth is round.", "T",
                "2", "Pick the even number.", "3", "3", "4", "5", "1", "B",
                "4", "Explain gravity.", "1",
                "7",
                "",
            ],
        )
        test = author.create("test")
        author.save("test")

        assert isinstance(test, Test)
        assert test.essay_count == 1
        assert test.get(1).correct_answers == ["B"]

        respondent = make_session(workspace, ["t", "a", "Things fall.", ""])
        respondent.load("test", "Quiz.json")
        respondent.take("test")

        grader = make_session(workspace, [])
        report = grader.grade("Quiz.json", 1)

        assert report.correct_count == 1
        assert report.grade == 33
        assert report.auto_gradable_points == 67
        assert "was 1 essay question" in output_of(grader)

    def test_grade_rejects_unknown_response_number(self, workspace, sample_test):
        workspace.tests.save(sample_test, "midterm.json")
        workspace.test_responses.save_response(sample_test.record([["True"]]))
        session = make_session(workspace, [])

        assert session.grade("midterm.json", 5) is None
        assert "between 1 and 1" in output_of(session)

    def test_stale_answers_are_asked_again(self, workspace):
        test = Test(name="Primes")
        test.add_question(build_question("short_answer", "Name a prime"), ["2"])
        session = make_session(workspace, ["n", "y", "2", "3", "5"])
        session.test = test

        assert session.modify("test", 1) is True
        assert test.get(0).correct_answers == ["3", "5"]
        assert not test.get(0).is_stale

    def test_display_with_answers(self, workspace, sample_test):
        session = make_session(workspace, [])
        session.test = sample_test

        session.display("test", with_answers=True)

        out = output_of(session)
        assert "The correct choice is B) 7" in out
        assert "No automatic grading" in out

    def test_load_missing_file(self, workspace):
        session = make_session(workspace, [])

        assert session.load("test", "ghost.json") is None
        assert "Failed to load test" in output_of(session)
