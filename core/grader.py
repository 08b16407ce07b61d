"""Scoring of a finished attempt."""
from __future__ import annotations

import re
from typing import Dict, List

from core.answer_tracker import AnswerTracker
from models import (
    AnswerRecord,
    MultipleChoiceQuestion,
    Question,
    QuestionResult,
    QuizResult,
    Session,
    ShortAnswerQuestion,
)

PASS_THRESHOLD = 60

_WHITESPACE = re.compile(r"\s+")


def normalize_answer(value: str | None) -> str:
    """Drop all whitespace and case-fold, so "  Ab c " matches "abc"."""
    return _WHITESPACE.sub("", value or "").casefold()


def short_answer_key_results(
    question: ShortAnswerQuestion, text: Dict[str, str] | None
) -> Dict[str, bool]:
    text = text or {}
    return {
        key: normalize_answer(text.get(key, "")) == normalize_answer(expected)
        for key, expected in question.correct_answer.items()
    }


def original_selection(
    session: Session, question: MultipleChoiceQuestion, record: AnswerRecord
) -> int | None:
    if record.selected is None:
        return None
    return session.to_original_index(question.id, record.selected)


def grade_question(
    session: Session, question: Question, record: AnswerRecord
) -> QuestionResult:
    if isinstance(question, ShortAnswerQuestion):
        key_results = short_answer_key_results(question, record.text)
        return QuestionResult(
            question_id=question.id,
            kind=question.kind,
            selected_answer=None,
            correct_answer=dict(question.correct_answer),
            is_correct=all(key_results.values()),
            text_answer=dict(record.text or {}),
            key_results=key_results,
        )
    if isinstance(question, MultipleChoiceQuestion):
        selected = original_selection(session, question, record)
        return QuestionResult(
            question_id=question.id,
            kind=question.kind,
            selected_answer=selected,
            correct_answer=question.correct_answer,
            is_correct=selected == question.correct_answer,
        )
    raise TypeError(f"Unsupported question type: {type(question).__name__}")


def check_answer(session: Session, tracker: AnswerTracker, question_id: int) -> bool:
    """Grade a single question, e.g. before showing its explanation."""
    question = session.get(question_id)
    return grade_question(session, question, tracker.get_current(question_id)).is_correct


def score_percent(correct: int, total: int) -> int:
    if total == 0:
        return 0
    # half up, so 12.5 becomes 13
    return (correct * 200 + total) // (2 * total)


def grade(session: Session, tracker: AnswerTracker) -> QuizResult:
    """
    Build the result for a session from the tracker's answers.

    Multiple choice selections are reported in original option order, so the
    result can be shown without the permutation table. Unanswered questions
    count as incorrect. The tracker is only read.
    """
    answers: List[QuestionResult] = [
        grade_question(session, question, tracker.get_current(question.id))
        for question in session.questions
    ]
    correct = sum(1 for answer in answers if answer.is_correct)
    score = score_percent(correct, len(answers))
    return QuizResult(
        quiz_title=session.title,
        total_questions=len(answers),
        correct_answers=correct,
        score=score,
        passed=bool(answers) and score >= PASS_THRESHOLD,
        answers=tuple(answers),
    )
