"""Build the question sequence for one quiz attempt."""
from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Tuple

from core.shuffle import shuffle
from models import (
    MultipleChoiceQuestion,
    Question,
    QuestionBank,
    QuizMode,
    QuizSettings,
    Session,
)

log = logging.getLogger(__name__)

DIFFICULTY_FILTER_MODES = (QuizMode.DIFFICULTY, QuizMode.CUSTOM)


def filter_questions(
    questions: List[Question], settings: QuizSettings
) -> List[Question]:
    """Apply the difficulty and range filters that the mode enables."""
    if settings.difficulty is not None and settings.mode in DIFFICULTY_FILTER_MODES:
        questions = [q for q in questions if q.difficulty == settings.difficulty]
    if settings.mode == QuizMode.RANGE and settings.question_ranges:
        questions = [
            q
            for q in questions
            if any(q.id in question_range for question_range in settings.question_ranges)
        ]
    return questions


def limit_questions(
    questions: List[Question],
    settings: QuizSettings,
    rng: Optional[random.Random] = None,
) -> List[Question]:
    count = settings.question_count
    if count is None or count >= len(questions):
        return questions
    if settings.mode == QuizMode.RANDOM:
        # random mode always draws again, even after shuffle_questions
        return shuffle(questions, rng)[:count]
    return questions[:count]


def shuffle_option_orders(
    questions: List[Question], rng: Optional[random.Random] = None
) -> Dict[int, Tuple[int, ...]]:
    """Draw an independent option permutation for each multiple choice question."""
    orders: Dict[int, Tuple[int, ...]] = {}
    for question in questions:
        if isinstance(question, MultipleChoiceQuestion):
            orders[question.id] = tuple(shuffle(range(len(question.options)), rng))
    return orders


def build_session(
    bank: QuestionBank,
    settings: QuizSettings,
    rng: Optional[random.Random] = None,
) -> Session:
    """
    Turn a bank and settings into the session presented to the user.

    Steps run in a fixed order: filter, order, limit, then shuffle options.
    An empty filter result gives an empty session rather than an error.
    """
    questions = filter_questions(list(bank.questions), settings)
    filtered_count = len(questions)

    if settings.shuffle_questions:
        questions = shuffle(questions, rng)

    questions = limit_questions(questions, settings, rng)

    permutations: Dict[int, Tuple[int, ...]] = {}
    if settings.shuffle_options:
        permutations = shuffle_option_orders(questions, rng)

    log.debug(
        "Built session for %r: mode=%s, %d of %d questions after filtering, %d selected",
        bank.title,
        settings.mode.value,
        filtered_count,
        len(bank.questions),
        len(questions),
    )
    return Session(title=bank.title, questions=questions, permutations=permutations)
