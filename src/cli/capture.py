"""
Answer capture.

Questions never read input themselves. The shell passes an AnswerSource
(the terminal, or a scripted list of lines) and collect_answers() keeps
asking until the question's handler accepts each answer, so a reused
choice letter or matching number is refused as soon as it is typed.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from loguru import logger
from rich.console import Console, RenderableType
from rich.markup import escape
from rich.prompt import Prompt
from rich.text import Text

from src.cli.render import question_panel
from src.core.errors import AnswerValidationError
from src.questions import Question, QuestionKind, handler_for
from src.surveys import ResponseSet, Survey, Test


class AnswerSource(Protocol):
    """Where answers come from and where capture messages go."""

    def ask(self, prompt: str) -> str:
        """Return one line of input for `prompt`."""
        ...

    def tell(self, message: RenderableType) -> None:
        """Show a message (rich markup or renderable) to the respondent."""
        ...


class ConsoleAnswerSource:
    """Reads answers from the terminal with rich prompts."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def ask(self, prompt: str) -> str:
        if not prompt:
            return self.console.input()
        # Text() so brackets in user-written prompts are not read as markup
        return Prompt.ask(Text(prompt), console=self.console, default="", show_default=False)

    def tell(self, message: RenderableType) -> None:
        self.console.print(message)


class ScriptedAnswerSource:
    """
    Answers from a fixed sequence of lines.

    Used by tests and scripted runs. Everything asked and told is recorded;
    running out of lines raises EOFError, like a closed terminal.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self.prompts: list[str] = []
        self.messages: list[RenderableType] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        try:
            return next(self._lines)
        except StopIteration:
            raise EOFError(f"No scripted input left for prompt: {prompt!r}") from None

    def tell(self, message: RenderableType) -> None:
        self.messages.append(message)

    @property
    def text_messages(self) -> list[str]:
        return [m for m in self.messages if isinstance(m, str)]


def read_block(source: AnswerSource, label: str) -> str:
    """Read lines until a blank one and join them."""
    source.tell(escape(label))
    lines = []
    while True:
        line = source.ask("")
        if not line.strip():
            break
        lines.append(line.rstrip("\r\n"))
    return "\n".join(lines)


def collect_answers(question: Question, source: AnswerSource) -> list[str]:
    """
    Capture a complete, normalized answer set for `question`.

    Each answer is checked against the ones already given; invalid input is
    reported through `source` and asked again.
    """
    handler = handler_for(question)
    is_essay = question.kind == QuestionKind.ESSAY.value

    answers: list[str] = []
    for position in range(question.answer_count):
        label = handler.answer_label(question, position)
        while True:
            raw = read_block(source, label) if is_essay else source.ask(label)
            try:
                answers.append(handler.normalize_one(question, raw, position, answers))
                break
            except AnswerValidationError as e:
                logger.debug(f"Rejected {question.kind} answer {raw!r}: {e}")
                source.tell(f"[yellow]{escape(str(e))}[/yellow]")

    return handler.normalize(question, answers)


def take(collection: Survey | Test, source: AnswerSource) -> ResponseSet:
    """Present every question in order and record the answers."""
    answers = []
    for index, question in enumerate(collection.variants()):
        source.tell(question_panel(index, question))
        answers.append(collect_answers(question, source))

    response = collection.record(answers)
    logger.info(f"Captured {len(answers)} answer set(s) for '{collection.name}'")
    return response
