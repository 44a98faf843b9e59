"""
Typer CLI for surveyor.

Commands:
    surveyor                        - Interactive Survey/Test menus
    surveyor survey create          - Create a survey and save it
    surveyor survey display FILE    - Show a saved survey
    surveyor survey take FILE       - Answer a survey and store the response
    surveyor survey modify FILE     - Edit one question of a saved survey
    surveyor survey tabulate FILE   - Summarize every response to a survey
    surveyor survey list            - List saved surveys
    surveyor test create            - Create a test (questions + correct answers)
    surveyor test display FILE      - Show a test, --answers to include correct answers
    surveyor test take FILE         - Answer a test and store the response
    surveyor test modify FILE       - Edit one question of a saved test
    surveyor test tabulate FILE     - Summarize every response to a test
    surveyor test grade FILE        - Grade one stored response to a test
    surveyor test list              - List saved tests

Usage:
    surveyor --help
    surveyor --data-dir ./classroom survey create
    surveyor test grade midterm.json --response 2
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Optional, TypeVar

import typer
from loguru import logger
from rich.console import Console

from config import get_settings
from src.cli import render
from src.cli.session import CollectionKind, SurveyorSession
from src.storage import Workspace

T = TypeVar("T")

app = typer.Typer(
    help="surveyor: build, take, tabulate and grade surveys and tests",
    no_args_is_help=False,  # Allow running without args for interactive mode
    invoke_without_command=True,
)

survey_app = typer.Typer(
    name="survey",
    help="Create, take and tabulate surveys",
    no_args_is_help=True,
)
test_app = typer.Typer(
    name="test",
    help="Create, take, tabulate and grade tests",
    no_args_is_help=True,
)

app.add_typer(survey_app, name="survey")
app.add_typer(test_app, name="test")

console = Console()


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None, "--data-dir", "-d", help="Root directory for surveys, tests and responses"
    ),
):
    """
    Surveys and tests in the terminal.

    Run without arguments for the interactive menus, or use the survey and
    test subcommands for single operations.
    """
    settings = get_settings()
    if data_dir is not None:
        settings = settings.model_copy(update={"data_dir": data_dir})
    configure_logging(settings.log_level)
    logger.debug(f"Storage: {settings.get_storage_config()}")

    ctx.obj = SurveyorSession(Workspace.from_settings(settings), console=console)
    if ctx.invoked_subcommand is None:
        ctx.obj.run()


# ========================================
# Helpers
# ========================================


def _interactive(action: Callable[[], T]) -> T:
    """Run a prompting action; closed input ends the command with an error."""
    try:
        return action()
    except (EOFError, KeyboardInterrupt):
        console.print("\n[yellow]Input ended before the command finished.[/yellow]")
        raise typer.Exit(1)


def _load(session: SurveyorSession, kind: CollectionKind, file: Optional[str]) -> None:
    if _interactive(lambda: session.load(kind, file)) is None:
        raise typer.Exit(1)


def _list(session: SurveyorSession, kind: CollectionKind) -> None:
    keys = session.list_files(kind)
    if not keys:
        console.print(f"[yellow]No {kind} files found.[/yellow]")
        return
    console.print(render.files_table(f"Saved {kind}s", keys))


def _create(session: SurveyorSession, kind: CollectionKind, file: Optional[str]) -> None:
    if _interactive(lambda: session.create(kind)) is None:
        raise typer.Exit(1)
    if session.save(kind, key=file, ask_name=False) is None:
        raise typer.Exit(1)


def _take(session: SurveyorSession, kind: CollectionKind, file: Optional[str]) -> None:
    _load(session, kind, file)
    if _interactive(lambda: session.take(kind)) is None:
        raise typer.Exit(1)


def _modify(session: SurveyorSession, kind: CollectionKind, file: Optional[str], question: Optional[int]) -> None:
    _load(session, kind, file)
    if not _interactive(lambda: session.modify(kind, question)):
        raise typer.Exit(1)
    if session.save(kind, ask_name=False) is None:
        raise typer.Exit(1)


def _tabulate(session: SurveyorSession, kind: CollectionKind, file: Optional[str]) -> None:
    _load(session, kind, file)
    if not session.tabulate(kind):
        raise typer.Exit(1)


# ========================================
# Survey Commands
# ========================================


@survey_app.command("create")
def survey_create(
    ctx: typer.Context,
    file: Optional[str] = typer.Option(None, "--file", "-f", help="File name to save as (default: <name>.json)"),
):
    """Create a new survey interactively and save it."""
    _create(ctx.obj, "survey", file)


@survey_app.command("display")
def survey_display(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Survey file (asks when omitted)"),
):
    """Display a saved survey."""
    session: SurveyorSession = ctx.obj
    _load(session, "survey", file)
    session.display("survey")


@survey_app.command("take")
def survey_take(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Survey file (asks when omitted)"),
):
    """Take a saved survey and store the responses."""
    _take(ctx.obj, "survey", file)


@survey_app.command("modify")
def survey_modify(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Survey file (asks when omitted)"),
    question: Optional[int] = typer.Option(None, "--question", "-q", min=1, help="Question number to edit"),
):
    """Modify one question of a saved survey and save it back."""
    _modify(ctx.obj, "survey", file, question)


@survey_app.command("tabulate")
def survey_tabulate(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Survey file (asks when omitted)"),
):
    """Tabulate every stored response to a survey."""
    _tabulate(ctx.obj, "survey", file)


@survey_app.command("list")
def survey_list(ctx: typer.Context):
    """List saved surveys."""
    _list(ctx.obj, "survey")


# ========================================
# Test Commands
# ========================================


@test_app.command("create")
def test_create(
    ctx: typer.Context,
    file: Optional[str] = typer.Option(None, "--file", "-f", help="File name to save as (default: <name>.json)"),
):
    """Create a new test interactively, with correct answers, and save it."""
    _create(ctx.obj, "test", file)


@test_app.command("display")
def test_display(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Test file (asks when omitted)"),
    answers: bool = typer.Option(False, "--answers", "-a", help="Show the correct answers"),
):
    """Display a saved test, optionally with its correct answers."""
    session: SurveyorSession = ctx.obj
    _load(session, "test", file)
    session.display("test", with_answers=answers)


@test_app.command("take")
def test_take(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Test file (asks when omitted)"),
):
    """Take a saved test and store the responses."""
    _take(ctx.obj, "test", file)


@test_app.command("modify")
def test_modify(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Test file (asks when omitted)"),
    question: Optional[int] = typer.Option(None, "--question", "-q", min=1, help="Question number to edit"),
):
    """Modify one question (and its correct answers) of a saved test."""
    _modify(ctx.obj, "test", file, question)


@test_app.command("tabulate")
def test_tabulate(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Test file (asks when omitted)"),
):
    """Tabulate every stored response to a test."""
    _tabulate(ctx.obj, "test", file)


@test_app.command("grade")
def test_grade(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="Test file (asks when omitted)"),
    response: Optional[int] = typer.Option(
        None, "--response", "-r", min=1, help="Response number, as listed (asks when omitted)"
    ),
):
    """Grade one stored response to a test."""
    session: SurveyorSession = ctx.obj
    if _interactive(lambda: session.grade(file, response)) is None:
        raise typer.Exit(1)


@test_app.command("list")
def test_list(ctx: typer.Context):
    """List saved tests."""
    _list(ctx.obj, "test")


# ========================================
# Entry Point
# ========================================


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
