"""Per-question answer state and navigation for a running attempt."""
from __future__ import annotations

from typing import Dict, List, Optional

from core.errors import InvalidAnswerError, QuizError, UnknownQuestionError
from models import (
    AnswerRecord,
    MultipleChoiceQuestion,
    Question,
    Session,
    ShortAnswerQuestion,
)


class AnswerTracker:
    """
    Holds the user's current answer for every question in a session.

    Multiple choice answers are stored as display indices; the grader maps
    them back through the session's permutation table. Moving between
    questions never touches the stored answers.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.current_index = 0
        self._records: Dict[int, AnswerRecord] = {}
        for question in session.questions:
            if isinstance(question, ShortAnswerQuestion):
                text = {key: "" for key in question.answer_keys}
                self._records[question.id] = AnswerRecord(question.id, text=text)
            else:
                self._records[question.id] = AnswerRecord(question.id)

    def _record(self, question_id: int) -> AnswerRecord:
        record = self._records.get(question_id)
        if record is None:
            raise UnknownQuestionError(question_id)
        return record

    def set_selection(self, question_id: int, display_index: int) -> None:
        question = self.session.get(question_id)
        if not isinstance(question, MultipleChoiceQuestion):
            raise InvalidAnswerError(
                f"Question {question_id} is not a multiple choice question"
            )
        if not 0 <= display_index < len(question.options):
            raise InvalidAnswerError(
                f"Option {display_index} is out of range for question {question_id}"
            )
        self._record(question_id).selected = display_index

    def clear_selection(self, question_id: int) -> None:
        self._record(question_id).selected = None

    def set_text(self, question_id: int, key: str, value: str) -> None:
        question = self.session.get(question_id)
        if not isinstance(question, ShortAnswerQuestion):
            raise InvalidAnswerError(
                f"Question {question_id} is not a short answer question"
            )
        if key not in question.correct_answer:
            raise InvalidAnswerError(f"Unknown answer key {key!r} for question {question_id}")
        record = self._record(question_id)
        record.text = {**(record.text or {}), key: value}

    def get_current(self, question_id: int) -> AnswerRecord:
        """Return a copy of the stored answer."""
        record = self._record(question_id)
        text = dict(record.text) if record.text is not None else None
        return AnswerRecord(record.question_id, selected=record.selected, text=text)

    def is_answered(self, question_id: int) -> bool:
        question = self.session.get(question_id)
        record = self._record(question_id)
        if isinstance(question, ShortAnswerQuestion):
            text = record.text or {}
            return all(text.get(key, "").strip() for key in question.answer_keys)
        return record.selected is not None

    def answered_count(self) -> int:
        return sum(1 for question in self.session.questions if self.is_answered(question.id))

    def unanswered_ids(self) -> List[int]:
        return [q.id for q in self.session.questions if not self.is_answered(q.id)]

    # Navigation

    @property
    def current_question(self) -> Optional[Question]:
        if self.session.is_empty:
            return None
        return self.session.questions[self.current_index]

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index >= len(self.session) - 1

    def go_next(self) -> bool:
        if self.is_last:
            return False
        self.current_index += 1
        return True

    def go_previous(self) -> bool:
        if self.is_first:
            return False
        self.current_index -= 1
        return True

    def jump_to(self, index: int) -> None:
        if not 0 <= index < len(self.session):
            raise QuizError(f"Question number {index + 1} is out of range")
        self.current_index = index
