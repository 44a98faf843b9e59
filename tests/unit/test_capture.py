"""
Unit tests for answer capture and authoring prompts.

Everything runs against ScriptedAnswerSource, so no terminal is needed.
"""

import pytest

from src.cli.authoring import ask_correct_answers, ask_edits, ask_int, ask_question
from src.cli.capture import ScriptedAnswerSource, collect_answers, take
from src.questions import QuestionKind, build_question
from src.surveys import Survey


class TestScriptedAnswerSource:
    def test_records_prompts_and_messages(self):
        source = ScriptedAnswerSource(["one"])

        assert source.ask("First?") == "one"
        source.tell("hello")

        assert source.prompts == ["First?"]
        assert source.text_messages == ["hello"]

    def test_runs_out(self):
        source = ScriptedAnswerSource([])

        with pytest.raises(EOFError):
            source.ask("Anything?")


class TestCollectAnswers:
    """Live capture re-prompts until each answer is accepted."""

    def test_true_false_retries_invalid_input(self, true_false_question):
        source = ScriptedAnswerSource(["maybe", "T"])

        assert collect_answers(true_false_question, source) == ["True"]
        assert len(source.prompts) == 2
        assert any("T" in m for m in source.text_messages)

    def test_multiple_choice_duplicate_rejected_at_capture(self):
        question = build_question("multiple_choice", "Pick two", choices=["a", "b", "c"], answer_count=2)
        source = ScriptedAnswerSource(["a", "A", "c"])

        assert collect_answers(question, source) == ["A", "C"]
        assert any("already selected" in m for m in source.text_messages)

    def test_matching_duplicate_number_rejected_at_capture(self, matching_question):
        source = ScriptedAnswerSource(["1", "1", "2", "3"])

        assert collect_answers(matching_question, source) == ["A-1", "B-2", "C-3"]
        assert any("already been used" in m for m in source.text_messages)

    def test_matching_accepts_full_codes(self, matching_question):
        source = ScriptedAnswerSource(["A-3", "B-1", "C-2"])

        assert collect_answers(matching_question, source) == ["A-3", "B-1", "C-2"]

    def test_date_retries(self):
        question = build_question("date", "When?")
        source = ScriptedAnswerSource(["2023-02-29", "2024-02-29"])

        assert collect_answers(question, source) == ["2024-02-29"]

    def test_essay_reads_until_blank_line(self):
        question = build_question("essay", "Describe your week.", answer_count=2)
        source = ScriptedAnswerSource(["Busy.", "Very busy.", "", "Short.", ""])

        assert collect_answers(question, source) == ["Busy.\nVery busy.", "Short."]

    def test_short_answer_count(self):
        question = build_question("short_answer", "Two colors", answer_count=2)
        source = ScriptedAnswerSource(["red", "blue"])

        assert collect_answers(question, source) == ["red", "blue"]


class TestTake:
    def test_take_records_every_question(self, true_false_question, matching_question):
        survey = Survey(name="Geo")
        survey.add_question(true_false_question)
        survey.add_question(matching_question)
        source = ScriptedAnswerSource(["f", "2", "1", "3"])

        response = take(survey, source)

        assert response.subject_name == "Geo"
        assert response.answers == (("False",), ("A-2", "B-1", "C-3"))


class TestAuthoring:
    """Prompted construction of questions and edits."""

    def test_ask_int_bounds(self):
        source = ScriptedAnswerSource(["x", "0", "9", "3"])

        assert ask_int(source, "How many?", 1, 5) == 3

    def test_ask_multiple_choice_question(self):
        source = ScriptedAnswerSource(["Favorite fruit?", "1", "3", "Apple", "Pear", "Plum", "2"])

        question = ask_question(QuestionKind.MULTIPLE_CHOICE, source)

        assert question.choices == ["Apple", "Pear", "Plum"]
        assert question.answer_count == 2

    def test_ask_matching_question(self):
        source = ScriptedAnswerSource(["Match", "2", "a", "b", "1", "2"])

        question = ask_question(QuestionKind.MATCHING, source)

        assert question.left_items == ["a", "b"]
        assert question.right_items == ["1", "2"]
        assert question.answer_count == 2

    def test_essay_has_no_correct_answers(self):
        question = build_question("essay", "Discuss.")

        assert ask_correct_answers(question, ScriptedAnswerSource([])) is None

    def test_correct_answers_use_capture_rules(self, multiple_choice_question):
        source = ScriptedAnswerSource(["Q", "c"])

        assert ask_correct_answers(multiple_choice_question, source) == ["C"]

    def test_ask_edits_multiple_choice(self, multiple_choice_question):
        source = ScriptedAnswerSource(["n", "y", "B", "Session", "", "y", "2"])

        edits = ask_edits(multiple_choice_question, source)

        assert edits.prompt is None
        assert edits.choices == {"B": "Session"}
        assert edits.answer_count == 2

    def test_ask_edits_matching(self, matching_question):
        source = ScriptedAnswerSource(["y", "New prompt", "y", "c", "Chile", "3", "Santiago", "9", ""])

        edits = ask_edits(matching_question, source)

        assert edits.prompt == "New prompt"
        assert edits.left_items == {"C": "Chile"}
        assert edits.right_items == {3: "Santiago"}
        assert edits.answer_count is None

    def test_ask_edits_true_false_only_prompt(self, true_false_question):
        source = ScriptedAnswerSource(["n"])

        edits = ask_edits(true_false_question, source)

        assert edits.requested() == set()
