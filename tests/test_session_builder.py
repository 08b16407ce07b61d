import random

import pytest

from core.errors import InvalidSettingsError, UnknownQuestionError
from core.session_builder import build_session
from core.shuffle import shuffle
from factories import bank_of, mc, sa
from models import Difficulty, QuestionBank, QuestionRange, QuizMode, QuizSettings


def mixed_bank() -> QuestionBank:
    return QuestionBank(
        title="Mixed",
        questions=[
            mc(1, difficulty=Difficulty.HIGH),
            mc(2, difficulty=Difficulty.LOW),
            sa(3, {"A": "x"}, difficulty=Difficulty.HIGH),
            mc(4, difficulty=Difficulty.MEDIUM),
            mc(5, difficulty=Difficulty.HIGH),
        ],
    )


def test_all_mode_keeps_bank_order_without_permutations() -> None:
    bank = bank_of(3)
    session = build_session(bank, QuizSettings(mode=QuizMode.ALL))
    assert [q.id for q in session] == [1, 2, 3]
    assert dict(session.permutations) == {}
    assert session.questions[0] is bank.questions[0]
    assert session.title == "Bank"


@pytest.mark.parametrize("mode", [QuizMode.DIFFICULTY, QuizMode.CUSTOM])
def test_difficulty_filter_applies_in_difficulty_and_custom_modes(mode: QuizMode) -> None:
    session = build_session(mixed_bank(), QuizSettings(mode=mode, difficulty=Difficulty.HIGH))
    assert [q.id for q in session] == [1, 3, 5]
    assert all(q.difficulty == Difficulty.HIGH for q in session)


@pytest.mark.parametrize("mode", [QuizMode.ALL, QuizMode.RANDOM])
def test_difficulty_is_ignored_in_all_and_random_modes(mode: QuizMode) -> None:
    session = build_session(mixed_bank(), QuizSettings(mode=mode, difficulty=Difficulty.HIGH))
    assert len(session) == 5


def test_range_mode_keeps_questions_inside_any_range() -> None:
    settings = QuizSettings(
        mode=QuizMode.RANGE,
        question_ranges=(QuestionRange(2, 3), QuestionRange(5, 9)),
    )
    session = build_session(mixed_bank(), settings)
    assert [q.id for q in session] == [2, 3, 5]


def test_count_limit_takes_first_questions_in_order() -> None:
    session = build_session(bank_of(10), QuizSettings(mode=QuizMode.CUSTOM, question_count=4))
    assert [q.id for q in session] == [1, 2, 3, 4]


def test_count_larger_than_population_is_clamped() -> None:
    session = build_session(bank_of(3), QuizSettings(question_count=50))
    assert len(session) == 3


def test_random_mode_draws_distinct_subset() -> None:
    bank = bank_of(10)
    settings = QuizSettings(mode=QuizMode.RANDOM, question_count=5)
    for seed in range(20):
        session = build_session(bank, settings, random.Random(seed))
        ids = [q.id for q in session]
        assert len(ids) == 5
        assert len(set(ids)) == 5
        assert set(ids) <= set(range(1, 11))


def test_random_mode_shuffles_even_without_shuffle_questions() -> None:
    bank = bank_of(10)
    settings = QuizSettings(mode=QuizMode.RANDOM, question_count=5)
    selections = {
        tuple(q.id for q in build_session(bank, settings, random.Random(seed)))
        for seed in range(30)
    }
    assert len(selections) > 1


def test_random_mode_with_shuffle_questions_draws_twice() -> None:
    bank = bank_of(10)
    settings = QuizSettings(mode=QuizMode.RANDOM, question_count=4, shuffle_questions=True)
    expected_rng = random.Random(13)
    expected = shuffle(shuffle(bank.questions, expected_rng), expected_rng)[:4]

    session = build_session(bank, settings, random.Random(13))

    assert list(session.questions) == expected


def test_shuffle_questions_keeps_every_question() -> None:
    session = build_session(
        bank_of(8), QuizSettings(shuffle_questions=True), random.Random(3)
    )
    assert sorted(q.id for q in session) == list(range(1, 9))


def test_shuffle_options_records_permutation_for_multiple_choice_only() -> None:
    session = build_session(mixed_bank(), QuizSettings(shuffle_options=True), random.Random(5))
    assert set(session.permutations) == {1, 2, 4, 5}
    for question_id, order in session.permutations.items():
        assert sorted(order) == [0, 1, 2, 3]
    assert session.display_options(3) == []


def test_option_permutation_round_trip() -> None:
    bank = QuestionBank(title="T", questions=[mc(i, correct=i % 4) for i in range(1, 21)])
    session = build_session(bank, QuizSettings(shuffle_options=True), random.Random(11))
    for question in session:
        display = session.to_display_index(question.id, question.correct_answer)
        assert session.to_original_index(question.id, display) == question.correct_answer
        assert session.display_options(question.id)[display] == question.options[question.correct_answer]


def test_option_permutations_are_drawn_per_question() -> None:
    bank = QuestionBank(title="T", questions=[mc(i, options="ABCDEF") for i in range(1, 11)])
    session = build_session(bank, QuizSettings(shuffle_options=True), random.Random(8))
    assert len(set(session.permutations.values())) > 1


def test_permutation_table_is_read_only() -> None:
    session = build_session(bank_of(2), QuizSettings(shuffle_options=True), random.Random(1))
    with pytest.raises(TypeError):
        session.permutations[1] = (0, 1, 2, 3)


def test_empty_filter_result_gives_empty_session() -> None:
    session = build_session(
        bank_of(4), QuizSettings(mode=QuizMode.DIFFICULTY, difficulty=Difficulty.HIGH)
    )
    assert session.is_empty
    assert len(session) == 0


def test_settings_reject_non_positive_count() -> None:
    with pytest.raises(InvalidSettingsError):
        QuizSettings(question_count=0)


def test_settings_accept_difficulty_labels() -> None:
    assert QuizSettings(difficulty="상").difficulty == Difficulty.HIGH
    with pytest.raises(InvalidSettingsError):
        QuizSettings(difficulty="extreme")


def test_session_lookup_of_unknown_question() -> None:
    session = build_session(bank_of(2), QuizSettings())
    with pytest.raises(UnknownQuestionError):
        session.get(99)
    assert session.index_of(2) == 1
