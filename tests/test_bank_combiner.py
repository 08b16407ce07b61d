import pytest

from core.bank_combiner import combine_banks
from core.errors import EmptyInputError
from factories import bank_of, sa
from models import QuestionBank, ShortAnswerQuestion


def test_combines_banks_and_renumbers_questions() -> None:
    first = bank_of(4, title="First", start=10)
    second = bank_of(3, title="Second", start=1)
    combined = combine_banks([first, second])

    assert [q.id for q in combined.questions] == [1, 2, 3, 4, 5, 6, 7]
    assert combined.title == "Combined Exam (First, Second)"
    assert [q.question for q in combined.questions] == [
        q.question for q in first.questions + second.questions
    ]


def test_source_banks_are_unchanged() -> None:
    first = bank_of(2, start=5)
    combine_banks([first, bank_of(1)])
    assert [q.id for q in first.questions] == [5, 6]


def test_custom_title_format() -> None:
    combined = combine_banks([bank_of(1, "A"), bank_of(1, "B")], "종합 시험 ({titles})")
    assert combined.title == "종합 시험 (A, B)"


def test_short_answer_questions_keep_their_answers() -> None:
    bank = QuestionBank(title="SA", questions=[sa(9, {"ㄱ": "foo"})])
    combined = combine_banks([bank_of(1), bank])
    question = combined.questions[1]
    assert isinstance(question, ShortAnswerQuestion)
    assert question.id == 2
    assert dict(question.correct_answer) == {"ㄱ": "foo"}


def test_empty_banks_are_skipped_but_titled() -> None:
    combined = combine_banks([QuestionBank(title="Empty"), bank_of(2, "Full")])
    assert len(combined) == 2
    assert combined.title == "Combined Exam (Empty, Full)"


@pytest.mark.parametrize(
    "banks",
    [[], [QuestionBank(title="Empty")], [QuestionBank(title="A"), QuestionBank(title="B")]],
)
def test_nothing_to_combine(banks) -> None:
    with pytest.raises(EmptyInputError, match="no questions to combine"):
        combine_banks(banks)
