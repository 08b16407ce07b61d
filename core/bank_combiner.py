"""Merge several question banks into one."""
from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List

from core.errors import EmptyInputError
from models import Question, QuestionBank

log = logging.getLogger(__name__)

DEFAULT_TITLE_FORMAT = "Combined Exam ({titles})"


def combine_banks(
    banks: Iterable[QuestionBank],
    title_format: str = DEFAULT_TITLE_FORMAT,
) -> QuestionBank:
    """
    Concatenate banks in order and renumber their questions from 1.

    Raises EmptyInputError when no bank is given or all of them are empty.
    The source banks are left as they are.
    """
    banks = list(banks)
    questions: List[Question] = []
    titles: List[str] = []
    next_id = 1
    for bank in banks:
        titles.append(bank.title)
        for question in bank.questions:
            questions.append(dataclasses.replace(question, id=next_id))
            next_id += 1

    if not questions:
        raise EmptyInputError()

    title = title_format.format(titles=", ".join(titles))
    log.info("Combined %d banks into %r (%d questions)", len(banks), title, len(questions))
    return QuestionBank(title=title, questions=questions)
