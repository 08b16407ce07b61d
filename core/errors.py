"""Error types raised by the quiz engine."""


class QuizError(Exception):
    """Base class for quiz engine errors."""


class EmptyInputError(QuizError):
    """Raised when there are no questions to combine."""

    def __init__(self, message: str = "no questions to combine") -> None:
        super().__init__(message)


class MalformedQuestionError(QuizError):
    """Raised when a bank or question violates the bank schema."""


class InvalidSettingsError(QuizError):
    """Raised when quiz settings are out of range."""


class UnknownQuestionError(QuizError):
    """Raised when a question id is not part of the session."""

    def __init__(self, question_id: int) -> None:
        super().__init__(f"Question {question_id} is not in this session")
        self.question_id = question_id


class InvalidAnswerError(QuizError):
    """Raised when an answer does not fit the question it is given for."""
