from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from core.errors import InvalidSettingsError, MalformedQuestionError, UnknownQuestionError

MULTIPLE_CHOICE = "multiple_choice"
SHORT_ANSWER = "short_answer"


class Difficulty(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, label: object) -> "Difficulty":
        """Resolve a bank label ("high", "상", ...) to a Difficulty."""
        if isinstance(label, cls):
            return label
        if isinstance(label, str):
            cleaned = label.strip()
            resolved = _DIFFICULTY_ALIASES.get(cleaned) or _DIFFICULTY_ALIASES.get(
                cleaned.lower()
            )
            if resolved is not None:
                return resolved
        raise ValueError(f"Unknown difficulty: {label!r}")


_DIFFICULTY_ALIASES = {
    "high": Difficulty.HIGH,
    "medium": Difficulty.MEDIUM,
    "low": Difficulty.LOW,
    "상": Difficulty.HIGH,
    "중": Difficulty.MEDIUM,
    "하": Difficulty.LOW,
}


class QuizMode(str, enum.Enum):
    ALL = "all"
    RANDOM = "random"
    DIFFICULTY = "difficulty"
    CUSTOM = "custom"
    RANGE = "range"


@dataclass(frozen=True)
class MultipleChoiceQuestion:
    id: int
    difficulty: Difficulty
    question: str
    options: Tuple[str, ...]
    correct_answer: int
    explanation: str = ""
    reference: str = ""

    kind = MULTIPLE_CHOICE

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        if len(self.options) < 2:
            raise MalformedQuestionError(
                f"Question {self.id}: multiple choice needs at least 2 options"
            )
        if isinstance(self.correct_answer, bool) or not isinstance(self.correct_answer, int):
            raise MalformedQuestionError(
                f"Question {self.id}: correctAnswer must be an option index"
            )
        if not 0 <= self.correct_answer < len(self.options):
            raise MalformedQuestionError(
                f"Question {self.id}: correctAnswer {self.correct_answer} is out of range"
            )


@dataclass(frozen=True)
class ShortAnswerQuestion:
    id: int
    difficulty: Difficulty
    question: str
    correct_answer: Mapping[str, str]
    explanation: str = ""
    reference: str = ""

    kind = SHORT_ANSWER

    def __post_init__(self) -> None:
        if not self.correct_answer:
            raise MalformedQuestionError(
                f"Question {self.id}: short answer needs at least one answer key"
            )
        object.__setattr__(
            self, "correct_answer", MappingProxyType(dict(self.correct_answer))
        )

    @property
    def answer_keys(self) -> Tuple[str, ...]:
        return tuple(self.correct_answer.keys())


Question = Union[MultipleChoiceQuestion, ShortAnswerQuestion]


@dataclass(frozen=True)
class QuestionBank:
    title: str
    questions: Tuple[Question, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "questions", tuple(self.questions))

    def __len__(self) -> int:
        return len(self.questions)

    def difficulties(self) -> List[Difficulty]:
        seen: List[Difficulty] = []
        for question in self.questions:
            if question.difficulty not in seen:
                seen.append(question.difficulty)
        return seen

    def get(self, question_id: int) -> Optional[Question]:
        return next((q for q in self.questions if q.id == question_id), None)


@dataclass(frozen=True)
class QuestionRange:
    """Inclusive range of question ids."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidSettingsError(
                f"Invalid question range {self.start}-{self.end}"
            )

    def __contains__(self, question_id: object) -> bool:
        return isinstance(question_id, int) and self.start <= question_id <= self.end


@dataclass(frozen=True)
class QuizSettings:
    mode: QuizMode = QuizMode.ALL
    question_count: Optional[int] = None
    difficulty: Optional[Difficulty] = None
    question_ranges: Tuple[QuestionRange, ...] = ()
    shuffle_questions: bool = False
    shuffle_options: bool = False

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "mode", QuizMode(self.mode))
        except ValueError as exc:
            raise InvalidSettingsError(f"Unknown mode: {self.mode!r}") from exc
        object.__setattr__(self, "question_ranges", tuple(self.question_ranges))
        if self.difficulty is not None:
            try:
                object.__setattr__(self, "difficulty", Difficulty.parse(self.difficulty))
            except ValueError as exc:
                raise InvalidSettingsError(str(exc)) from exc
        if self.question_count is not None and self.question_count < 1:
            raise InvalidSettingsError("questionCount must be at least 1")


@dataclass(frozen=True)
class Session:
    """Questions presented in one attempt plus their option permutations.

    ``permutations`` maps a question id to the original option index held at
    each display position. Questions without an entry show options in bank
    order.
    """

    title: str
    questions: Tuple[Question, ...] = ()
    permutations: Mapping[int, Tuple[int, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "questions", tuple(self.questions))
        object.__setattr__(
            self,
            "permutations",
            MappingProxyType(
                {qid: tuple(order) for qid, order in self.permutations.items()}
            ),
        )

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self.questions)

    @property
    def is_empty(self) -> bool:
        return not self.questions

    def get(self, question_id: int) -> Question:
        for question in self.questions:
            if question.id == question_id:
                return question
        raise UnknownQuestionError(question_id)

    def index_of(self, question_id: int) -> int:
        for index, question in enumerate(self.questions):
            if question.id == question_id:
                return index
        raise UnknownQuestionError(question_id)

    def option_order(self, question_id: int) -> Tuple[int, ...]:
        question = self.get(question_id)
        if not isinstance(question, MultipleChoiceQuestion):
            return ()
        order = self.permutations.get(question_id)
        if order is None:
            return tuple(range(len(question.options)))
        return order

    def display_options(self, question_id: int) -> List[str]:
        question = self.get(question_id)
        if not isinstance(question, MultipleChoiceQuestion):
            return []
        return [question.options[i] for i in self.option_order(question_id)]

    def to_original_index(self, question_id: int, display_index: int) -> int:
        return self.option_order(question_id)[display_index]

    def to_display_index(self, question_id: int, original_index: int) -> int:
        return self.option_order(question_id).index(original_index)


@dataclass
class AnswerRecord:
    question_id: int
    selected: Optional[int] = None
    text: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class QuestionResult:
    question_id: int
    kind: str
    selected_answer: Optional[int]
    correct_answer: Union[int, Dict[str, str]]
    is_correct: bool
    text_answer: Optional[Dict[str, str]] = None
    key_results: Optional[Dict[str, bool]] = None


@dataclass(frozen=True)
class QuizResult:
    quiz_title: str
    total_questions: int
    correct_answers: int
    score: int
    passed: bool
    answers: Tuple[QuestionResult, ...] = ()

    @property
    def incorrect_answers(self) -> int:
        return self.total_questions - self.correct_answers
