"""
Rich rendering for surveys, tests, tallies and grades.

Everything here builds renderables; printing is left to the caller's
Console. User-written text is always wrapped in Text so it is never
parsed as markup.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.console import Console, Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.grading import GradeReport
from src.questions import Question, QuestionKind, QuestionTally, handler_for
from src.surveys import ResponseSet, Survey, Test

KIND_TITLES = {
    QuestionKind.TRUE_FALSE.value: "True/False",
    QuestionKind.MULTIPLE_CHOICE.value: "Multiple Choice",
    QuestionKind.SHORT_ANSWER.value: "Short Answer",
    QuestionKind.ESSAY.value: "Essay",
    QuestionKind.DATE.value: "Date",
    QuestionKind.MATCHING.value: "Matching",
}


def question_panel(index: int, question: Question, answers: str | None = None) -> Panel:
    """Panel for one question, numbered from 1, optionally with its correct answers."""
    body = Text(handler_for(question).render(question))
    if answers:
        body.append("\n\n")
        body.append(answers, style="green")
    return Panel(
        body,
        title=f"[bold cyan]{index + 1}) {KIND_TITLES[question.kind]}[/bold cyan]",
        title_align="left",
        border_style="cyan",
        box=box.ROUNDED,
    )


def collection_header(collection: Survey | Test) -> Panel:
    label = "Test" if isinstance(collection, Test) else "Survey"
    count = len(collection)
    return Panel(
        Text(collection.name, style="bold"),
        title=f"[bold magenta]{label}[/bold magenta]",
        subtitle=f"{count} question{'s' if count != 1 else ''}",
        border_style="magenta",
        box=box.HEAVY,
    )


def print_collection(console: Console, collection: Survey | Test, with_answers: bool = False) -> None:
    """Print a survey or test, with correct answers for tests when asked."""
    console.print(collection_header(collection))
    if not len(collection):
        console.print("[dim]No questions yet.[/dim]")
        return

    if isinstance(collection, Test):
        for index, graded in enumerate(collection.questions):
            answers = graded.describe_answers() if with_answers else None
            console.print(question_panel(index, graded.question, answers))
    else:
        for index, question in enumerate(collection.questions):
            console.print(question_panel(index, question))


def tally_renderable(tally: QuestionTally) -> RenderableType:
    """Table (or list, for essays) summarizing one question's answers."""
    if tally.kind == QuestionKind.ESSAY.value:
        if not tally.responses:
            return Text("(no responses)", style="dim")
        return Group(*(Text(response) for response in tally.responses))

    if tally.kind == QuestionKind.MATCHING.value:
        table = Table(box=box.SIMPLE, show_edge=False)
        table.add_column("Count", justify="right", style="bold")
        table.add_column("Matches")
        for assignment in tally.assignments:
            pairs = ", ".join(f"{letter} -> {number}" for letter, number in assignment.pairs)
            table.add_row(str(assignment.count), Text(pairs))
        return table

    table = Table(box=box.SIMPLE, show_edge=False)
    table.add_column("Answer")
    table.add_column("Count", justify="right", style="bold")
    for answer, count in tally.counts.items():
        table.add_row(Text(answer), str(count))
    return table


def print_tabulation(
    console: Console,
    collection: Survey | Test,
    tallies: Sequence[QuestionTally],
    response_count: int,
) -> None:
    console.print(
        f"\n[bold]Tabulation of {escape(collection.name)}[/bold] "
        f"[dim]({response_count} response{'s' if response_count != 1 else ''})[/dim]"
    )
    questions = collection.variants()
    for tally in tallies:
        console.print(question_panel(tally.index, questions[tally.index]))
        console.print(tally_renderable(tally))


def grade_panel(report: GradeReport) -> Panel:
    """Themed panel with the grade and how much of it was auto-graded."""
    color = "green" if report.grade >= 50 else "red"
    content = Text()
    content.append(f"{report.grade}", style=f"bold {color}")
    content.append(" / 100\n\n", style="dim")
    content.append(report.summary())
    return Panel(
        content,
        title="[bold]GRADE[/bold]",
        border_style=color,
        box=box.ROUNDED,
        padding=(1, 2),
    )


def responses_table(subject_name: str, responses: Sequence[ResponseSet]) -> Table:
    table = Table(title=Text(f"Responses to {subject_name}"), box=box.ROUNDED)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Captured", style="dim")
    table.add_column("Answered", justify="right")
    for number, response in enumerate(responses, start=1):
        table.add_row(
            str(number),
            response.captured_at.strftime("%Y-%m-%d %H:%M:%S"),
            str(len(response.answers)),
        )
    return table


def files_table(title: str, keys: Sequence[str]) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("File")
    for number, key in enumerate(keys, start=1):
        table.add_row(str(number), Text(key))
    return table
