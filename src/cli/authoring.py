"""
Interactive authoring: building questions, correct answers and edits.

All input goes through an AnswerSource so the same flows run against the
terminal or a scripted list of lines. Each prompt re-asks until the value
is usable, so the models built here always validate.
"""

from __future__ import annotations

import re

from rich.markup import escape

from src.cli.capture import AnswerSource, collect_answers
from src.questions import (
    MatchingQuestion,
    MultipleChoiceQuestion,
    Question,
    QuestionEdits,
    QuestionKind,
    build_question,
    handler_for,
    index_for,
    letter_for,
)
from src.questions.models import MAX_ITEMS

NUMBER = re.compile(r"^[0-9]+$")

# Menu order of the "Add Questions" menu
ADD_QUESTION_MENU = [
    (QuestionKind.TRUE_FALSE, "Add a new T/F question"),
    (QuestionKind.MULTIPLE_CHOICE, "Add a new multiple-choice question"),
    (QuestionKind.SHORT_ANSWER, "Add a new short answer question"),
    (QuestionKind.ESSAY, "Add a new essay question"),
    (QuestionKind.DATE, "Add a new date question"),
    (QuestionKind.MATCHING, "Add a new matching question"),
]

KIND_NAMES = {
    QuestionKind.TRUE_FALSE: "True/False",
    QuestionKind.MULTIPLE_CHOICE: "multiple-choice",
    QuestionKind.SHORT_ANSWER: "short answer",
    QuestionKind.ESSAY: "essay",
    QuestionKind.DATE: "date",
    QuestionKind.MATCHING: "matching",
}


def warn(source: AnswerSource, message: str) -> None:
    source.tell(f"[yellow]{escape(message)}[/yellow]")


def ask_text(source: AnswerSource, prompt: str) -> str:
    """Ask until a non-blank line is given; returns it trimmed."""
    while True:
        value = source.ask(prompt).strip()
        if value:
            return value
        warn(source, "A value is required.")


def ask_int(source: AnswerSource, prompt: str, minimum: int, maximum: int | None = None) -> int:
    """Ask until an integer within [minimum, maximum] is given."""
    while True:
        raw = source.ask(prompt).strip()
        if not NUMBER.match(raw):
            warn(source, "Please enter a valid integer.")
            continue
        value = int(raw)
        if value < minimum or (maximum is not None and value > maximum):
            if maximum is None:
                warn(source, f"Number must be at least {minimum}.")
            else:
                warn(source, f"Please enter a number between {minimum} and {maximum}.")
            continue
        return value


def ask_yes_no(source: AnswerSource, prompt: str) -> bool:
    while True:
        raw = source.ask(f"{prompt} (Y/N)").strip().lower()
        if raw in ("y", "yes"):
            return True
        if raw in ("n", "no"):
            return False
        warn(source, "Please answer Y or N.")


def ask_menu_choice(source: AnswerSource, options: list[str], prompt: str = "Select an option") -> int:
    """Show a numbered menu and return the 0-based index of the chosen option."""
    lines = "\n".join(f"{number}) {escape(text)}" for number, text in enumerate(options, start=1))
    source.tell(lines)
    return ask_int(source, prompt, 1, len(options)) - 1


def ask_question(kind: QuestionKind, source: AnswerSource) -> Question:
    """Build a new question of `kind` from prompted values."""
    prompt = ask_text(source, f"Enter the prompt for your {KIND_NAMES[kind]} question")

    if kind == QuestionKind.MULTIPLE_CHOICE:
        count = ask_int(source, "Enter the number of choices", 2, MAX_ITEMS)
        choices = [ask_text(source, f"Enter choice {letter_for(i)}") for i in range(count)]
        selections = ask_int(source, "Enter the number of selections allowed (1 for single answer)", 1, count)
        return build_question(kind, prompt, answer_count=selections, choices=choices)

    if kind in (QuestionKind.SHORT_ANSWER, QuestionKind.ESSAY):
        count = ask_int(source, "Enter the number of responses allowed (>=1)", 1)
        return build_question(kind, prompt, answer_count=count)

    if kind == QuestionKind.MATCHING:
        size = ask_int(source, "Enter the number of items on each side (>=2)", 2, MAX_ITEMS)
        left = [ask_text(source, f"Enter left item {letter_for(i)}") for i in range(size)]
        right = [ask_text(source, f"Enter right item {i + 1}") for i in range(size)]
        return build_question(kind, prompt, left_items=left, right_items=right)

    return build_question(kind, prompt)


def ask_correct_answers(question: Question, source: AnswerSource) -> list[str] | None:
    """Correct answers for a test question; None for essays."""
    if question.kind == QuestionKind.ESSAY.value:
        return None
    noun = "answer" if question.answer_count == 1 else f"{question.answer_count} answers"
    source.tell(f"[bold]Enter the correct {noun}:[/bold]")
    return collect_answers(question, source)


def ask_edits(question: Question, source: AnswerSource) -> QuestionEdits:
    """
    Walk through the edits the question's kind supports.

    Returns the requested edits without applying them.
    """
    editable = handler_for(question).editable
    edits = QuestionEdits()

    if ask_yes_no(source, "Do you wish to modify the prompt?"):
        edits.prompt = ask_text(source, "Enter a new prompt")

    if "choices" in editable and isinstance(question, MultipleChoiceQuestion):
        if ask_yes_no(source, "Do you wish to modify the choices?"):
            _ask_choice_edits(question, source, edits)

    if "left_items" in editable and isinstance(question, MatchingQuestion):
        if ask_yes_no(source, "Do you wish to modify the items?"):
            _ask_item_edits(question, source, edits)

    if "answer_count" in editable:
        if ask_yes_no(source, "Do you wish to modify the number of responses?"):
            maximum = len(question.choices) if isinstance(question, MultipleChoiceQuestion) else None
            edits.answer_count = ask_int(source, "Enter the new number of responses", 1, maximum)

    return edits


def _ask_choice_edits(question: MultipleChoiceQuestion, source: AnswerSource, edits: QuestionEdits) -> None:
    while True:
        raw = source.ask(
            f"Enter the letter of the choice to modify (A-{question.last_letter}), "
            "or press Enter to finish"
        ).strip()
        if not raw:
            return
        index = index_for(raw)
        if not 0 <= index < len(question.choices):
            warn(source, f"Please enter a letter between A and {question.last_letter}.")
            continue
        letter = letter_for(index)
        edits.choices[letter] = ask_text(source, f"Enter new text for choice {letter}")


def _ask_item_edits(question: MatchingQuestion, source: AnswerSource, edits: QuestionEdits) -> None:
    last_letter = letter_for(question.size - 1)
    while True:
        raw = source.ask(
            "Enter the letter/number of the item to modify (e.g. A or 1), "
            "or press Enter to finish"
        ).strip()
        if not raw:
            return
        if NUMBER.match(raw):
            number = int(raw)
            if not 1 <= number <= question.size:
                warn(source, f"Please enter a number between 1 and {question.size}.")
                continue
            edits.right_items[number] = ask_text(source, f"Enter new value for right item {number}")
            continue
        index = index_for(raw)
        if not 0 <= index < question.size:
            warn(source, f"Please enter a letter between A and {last_letter} or a number.")
            continue
        letter = letter_for(index)
        edits.left_items[letter] = ask_text(source, f"Enter new value for left item {letter}")
