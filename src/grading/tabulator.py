"""
Tabulation of many responses to one survey or test.

For each question that at least one response reached, the answer sets of
all responses that have an entry for it are gathered and summarized by the
question's handler. Responses that are shorter than the question list are
skipped for the missing questions only.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from loguru import logger

from src.questions import QuestionTally, handler_for

if TYPE_CHECKING:
    from src.surveys import ResponseSet, Survey, Test


def tabulate(collection: Survey | Test, responses: Sequence[ResponseSet]) -> list[QuestionTally]:
    """
    Summarize `responses` per question of `collection`.

    Pure: neither the collection nor the responses are modified, and the
    same inputs always give the same tallies.
    """
    questions = collection.variants()
    longest = max((len(response.answers) for response in responses), default=0)

    tallies = []
    for index, question in enumerate(questions[:longest]):
        answer_lists = []
        for response in responses:
            answers = response.answers_for(index)
            if answers is not None:
                answer_lists.append(answers)

        tally = handler_for(question).tally(question, answer_lists)
        tally.index = index
        tallies.append(tally)

    logger.debug(
        f"Tabulated {len(responses)} response(s) to '{collection.name}' "
        f"over {len(tallies)} question(s)"
    )
    return tallies
