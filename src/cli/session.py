"""
Surveyor session: the state and actions behind the CLI.

A session holds the workspace stores, the console, the answer source and
the currently loaded survey and test. Typer commands call single actions;
run() drives the same actions from the interactive menus.

Usage:
    session = SurveyorSession(Workspace.from_settings())
    session.run()
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal

from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from src.cli import render
from src.cli.authoring import (
    ADD_QUESTION_MENU,
    ask_correct_answers,
    ask_edits,
    ask_int,
    ask_menu_choice,
    ask_question,
    ask_yes_no,
)
from src.cli.capture import AnswerSource, ConsoleAnswerSource, take
from src.core.errors import OutOfRangeError, StoreUnavailableError, SurveyError
from src.grading import GradeReport, score, tabulate
from src.storage import EntityStore, Workspace
from src.surveys import Survey, Test

CollectionKind = Literal["survey", "test"]


class SurveyorSession:
    """Interactive state for one run of the CLI."""

    def __init__(
        self,
        workspace: Workspace,
        console: Console | None = None,
        source: AnswerSource | None = None,
    ):
        self.workspace = workspace
        self.console = console or Console()
        self.source = source or ConsoleAnswerSource(self.console)
        self.survey: Survey | None = None
        self.test: Test | None = None
        # key each loaded collection came from, reused when saving it back
        self._keys: dict[str, str] = {}

    # ========================================
    # Stores and current collections
    # ========================================

    def _store(self, kind: CollectionKind) -> EntityStore:
        return self.workspace.surveys if kind == "survey" else self.workspace.tests

    def _response_store(self, kind: CollectionKind) -> EntityStore:
        return self.workspace.survey_responses if kind == "survey" else self.workspace.test_responses

    def current(self, kind: CollectionKind) -> Survey | Test | None:
        return self.survey if kind == "survey" else self.test

    def _set_current(self, kind: CollectionKind, collection: Survey | Test, key: str | None = None) -> None:
        if kind == "survey":
            self.survey = collection
        else:
            self.test = collection
        if key is None:
            self._keys.pop(kind, None)
        else:
            self._keys[kind] = key

    def _require(self, kind: CollectionKind, action: str) -> Survey | Test | None:
        collection = self.current(kind)
        if collection is None:
            self.console.print(f"[yellow]You must have a {kind} loaded in order to {action} it.[/yellow]")
        return collection

    def _error(self, error: Exception) -> None:
        self.console.print(f"[red]{escape(str(error))}[/red]")

    # ========================================
    # Files
    # ========================================

    def list_files(self, kind: CollectionKind) -> list[str]:
        return self._store(kind).keys(self.workspace.collection_extension)

    def resolve_key(self, kind: CollectionKind, name: str) -> str:
        """Accept a file name with or without the collection extension."""
        keys = self._store(kind).keys()
        if name in keys:
            return name
        with_extension = f"{name}{self.workspace.collection_extension}"
        return with_extension if with_extension in keys else name

    def choose_file(self, kind: CollectionKind, prompt: str = "Please select a file to load") -> str | None:
        keys = self.list_files(kind)
        if not keys:
            self.console.print(f"[yellow]No {kind} files found.[/yellow]")
            return None
        self.console.print(render.files_table(prompt, keys))
        number = ask_int(self.source, "Enter the number of the file (or 0 to cancel)", 0, len(keys))
        if number == 0:
            self.console.print("[dim]Cancelled.[/dim]")
            return None
        return keys[number - 1]

    def _load(self, kind: CollectionKind, key: str) -> Survey | Test | None:
        expected = Survey if kind == "survey" else Test
        try:
            return self._store(kind).load(self.resolve_key(kind, key), expected)
        except StoreUnavailableError as e:
            self.console.print(f"[red]Failed to load {kind}:[/red] {escape(str(e))}")
            return None

    # ========================================
    # Actions
    # ========================================

    def create(self, kind: CollectionKind) -> Survey | Test | None:
        """Name a new survey or test and add questions until the author finishes."""
        name = self.source.ask(f"Enter a name for your {kind}").strip()
        if not name:
            self.console.print(f"[yellow]The {kind} name cannot be empty.[/yellow]")
            return None

        collection: Survey | Test = Survey(name=name) if kind == "survey" else Test(name=name)
        options = [label for _, label in ADD_QUESTION_MENU]
        options.append("Finish adding questions")
        while True:
            self.console.print("\n[bold]Add Questions Menu[/bold]")
            choice = ask_menu_choice(self.source, options)
            if choice == len(ADD_QUESTION_MENU):
                break
            question_kind = ADD_QUESTION_MENU[choice][0]
            try:
                question = ask_question(question_kind, self.source)
                if isinstance(collection, Test):
                    collection.add_question(question, ask_correct_answers(question, self.source))
                else:
                    collection.add_question(question)
            except SurveyError as e:
                self._error(e)

        self._set_current(kind, collection)
        self.console.print(
            f"[green]{kind.capitalize()} '{escape(name)}' created with {len(collection)} question(s).[/green]"
        )
        return collection

    def display(self, kind: CollectionKind, with_answers: bool = False) -> bool:
        collection = self._require(kind, "display")
        if collection is None:
            return False
        render.print_collection(self.console, collection, with_answers=with_answers)
        return True

    def load(self, kind: CollectionKind, key: str | None = None) -> Survey | Test | None:
        key = key or self.choose_file(kind)
        if key is None:
            return None
        collection = self._load(kind, key)
        if collection is not None:
            self._set_current(kind, collection, self.resolve_key(kind, key))
            self.console.print(f"[green]{kind.capitalize()} '{escape(collection.name)}' loaded.[/green]")
        return collection

    def save(self, kind: CollectionKind, key: str | None = None, ask_name: bool = True) -> str | None:
        """Save the current collection; by default under its conventional file name."""
        collection = self._require(kind, "save")
        if collection is None:
            return None

        default = self._keys.get(kind) or collection.file_name(self.workspace.collection_extension)
        if key is None and ask_name:
            key = self.source.ask(f"Enter the filename to save the {kind} (default: {default})").strip()
        key = key or default

        try:
            saved = self._store(kind).save(collection, key)
        except StoreUnavailableError as e:
            self.console.print(f"[red]Error saving {kind}:[/red] {escape(str(e))}")
            return None
        self._keys[kind] = saved
        self.console.print(f"[green]{kind.capitalize()} saved to {escape(saved)}[/green]")
        return saved

    def take(self, kind: CollectionKind) -> str | None:
        """Capture one respondent's answers and store them."""
        collection = self._require(kind, "take")
        if collection is None:
            return None

        response = take(collection, self.source)
        try:
            key = self._response_store(kind).save_response(response, self.workspace.response_extension)
        except StoreUnavailableError as e:
            self.console.print(f"[red]Error saving responses:[/red] {escape(str(e))}")
            return None
        self.console.print(f"[green]Responses saved to {escape(key)}[/green]")
        return key

    def modify(self, kind: CollectionKind, number: int | None = None) -> bool:
        """Edit one question (1-based `number`), asking which when not given."""
        collection = self._require(kind, "modify")
        if collection is None:
            return False
        if not len(collection):
            self.console.print(f"[yellow]The {kind} has no questions to modify.[/yellow]")
            return False

        if number is None:
            render.print_collection(self.console, collection, with_answers=True)
            number = ask_int(self.source, "Enter the number of the question to modify", 1, len(collection))
        index = number - 1

        try:
            if isinstance(collection, Test):
                edits = ask_edits(collection.get(index).question, self.source)
                stale = collection.modify_question(index, edits)
                self._update_correct_answers(collection, index, stale)
            else:
                edits = ask_edits(collection.get(index), self.source)
                collection.modify_question(index, edits)
        except SurveyError as e:
            self._error(e)
            return False

        self.console.print(f"[green]Question {number} updated.[/green]")
        return True

    def _update_correct_answers(self, test: Test, index: int, stale: bool) -> None:
        graded = test.get(index)
        if graded.is_essay:
            return
        if stale:
            self.console.print(
                "[yellow]The number of answers changed; please enter new correct answers.[/yellow]"
            )
        elif not ask_yes_no(self.source, "Do you wish to modify the correct answer(s)?"):
            return
        self.console.print(Panel(escape(graded.describe_answers()), title="Current", border_style="dim"))
        graded.set_correct_answers(ask_correct_answers(graded.question, self.source))

    def tabulate(self, kind: CollectionKind) -> bool:
        collection = self._require(kind, "tabulate")
        if collection is None:
            return False

        responses = self._response_store(kind).load_responses(collection.name)
        if not responses:
            self.console.print(
                f"[yellow]No responses found for {kind} '{escape(collection.name)}'.[/yellow]"
            )
            return False
        tallies = tabulate(collection, responses)
        render.print_tabulation(self.console, collection, tallies, len(responses))
        return True

    def grade(self, key: str | None = None, response_number: int | None = None) -> GradeReport | None:
        """Grade one stored response to a stored test."""
        key = key or self.choose_file("test", "Select an existing test to grade")
        if key is None:
            return None
        test = self._load("test", key)
        if test is None:
            return None

        responses = self.workspace.test_responses.load_responses(test.name)
        if not responses:
            self.console.print(f"[yellow]No responses found for test '{escape(test.name)}'.[/yellow]")
            return None

        if response_number is None:
            self.console.print(render.responses_table(test.name, responses))
            response_number = ask_int(
                self.source, "Enter the number of the response set (or 0 to cancel)", 0, len(responses)
            )
            if response_number == 0:
                self.console.print("[dim]Cancelled.[/dim]")
                return None
        elif not 1 <= response_number <= len(responses):
            self._error(OutOfRangeError(f"Response number must be between 1 and {len(responses)}"))
            return None

        report = score(test, responses[response_number - 1])
        self.console.print(render.grade_panel(report))
        return report

    # ========================================
    # Interactive menus
    # ========================================

    def run(self) -> None:
        """Main menu loop. Ends on Exit or when input runs out."""
        try:
            self._menu_loop(
                "Main Menu",
                [("Survey", self.survey_menu), ("Test", self.test_menu)],
                exit_label="Exit",
            )
        except (EOFError, KeyboardInterrupt):
            logger.debug("Input closed, leaving the menu")
            self.console.print()

    def survey_menu(self) -> None:
        self._menu_loop(
            "Survey Menu",
            [
                ("Create a new Survey", lambda: self.create("survey")),
                ("Display the current Survey", lambda: self.display("survey")),
                ("Load an existing Survey", lambda: self.load("survey")),
                ("Save the current Survey", lambda: self.save("survey")),
                ("Take the current Survey", lambda: self.take("survey")),
                ("Modify the current Survey", lambda: self.modify("survey")),
                ("Tabulate the current Survey", lambda: self.tabulate("survey")),
            ],
        )

    def test_menu(self) -> None:
        self._menu_loop(
            "Test Menu",
            [
                ("Create a new Test", lambda: self.create("test")),
                ("Display the current Test without correct answers", lambda: self.display("test")),
                ("Display the current Test with correct answers", lambda: self.display("test", True)),
                ("Load an existing Test", lambda: self.load("test")),
                ("Save the current Test", lambda: self.save("test")),
                ("Take the current Test", lambda: self.take("test")),
                ("Modify the current Test", lambda: self.modify("test")),
                ("Tabulate the current Test", lambda: self.tabulate("test")),
                ("Grade a Test", self.grade),
            ],
        )

    def _menu_loop(
        self,
        title: str,
        entries: list[tuple[str, Callable[[], object]]],
        exit_label: str = "Return to the previous menu",
    ) -> None:
        options = [label for label, _ in entries] + [exit_label]
        while True:
            self.console.print(f"\n[bold cyan]{title}[/bold cyan]")
            choice = ask_menu_choice(self.source, options)
            if choice == len(entries):
                return
            entries[choice][1]()
