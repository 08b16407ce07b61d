from __future__ import annotations

from typing import Any

from core.errors import InvalidSettingsError, MalformedQuestionError
from models import (
    MULTIPLE_CHOICE,
    SHORT_ANSWER,
    Difficulty,
    MultipleChoiceQuestion,
    Question,
    QuestionBank,
    QuestionRange,
    QuestionResult,
    QuizMode,
    QuizResult,
    QuizSettings,
    Session,
    ShortAnswerQuestion,
)


def _text_field(entry: dict[str, Any], name: str, question_id: object) -> str:
    value = entry.get(name, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedQuestionError(f"Question {question_id}: {name} must be a string")
    return value


def parse_question(entry: object) -> Question:
    if not isinstance(entry, dict):
        raise MalformedQuestionError("Question entry must be an object")

    question_id = entry.get("id")
    if isinstance(question_id, bool) or not isinstance(question_id, int):
        raise MalformedQuestionError(f"Question id must be an integer, got {question_id!r}")

    try:
        difficulty = Difficulty.parse(entry.get("difficulty"))
    except ValueError as exc:
        raise MalformedQuestionError(f"Question {question_id}: {exc}") from exc

    prompt = _text_field(entry, "question", question_id)
    explanation = _text_field(entry, "explanation", question_id)
    reference = _text_field(entry, "reference", question_id)
    question_type = entry.get("type") or MULTIPLE_CHOICE
    correct = entry.get("correctAnswer")

    if question_type == SHORT_ANSWER:
        if not isinstance(correct, dict) or not all(
            isinstance(key, str) and isinstance(value, str)
            for key, value in correct.items()
        ):
            raise MalformedQuestionError(
                f"Question {question_id}: correctAnswer must map keys to text"
            )
        return ShortAnswerQuestion(
            id=question_id,
            difficulty=difficulty,
            question=prompt,
            correct_answer=correct,
            explanation=explanation,
            reference=reference,
        )

    if question_type == MULTIPLE_CHOICE:
        options = entry.get("options")
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise MalformedQuestionError(
                f"Question {question_id}: options must be a list of strings"
            )
        return MultipleChoiceQuestion(
            id=question_id,
            difficulty=difficulty,
            question=prompt,
            options=tuple(options),
            correct_answer=correct,
            explanation=explanation,
            reference=reference,
        )

    raise MalformedQuestionError(f"Question {question_id}: unknown type {question_type!r}")


def parse_bank(payload: object) -> QuestionBank:
    """Validate a bank document and turn it into a QuestionBank."""
    if not isinstance(payload, dict):
        raise MalformedQuestionError("Quiz document must be an object")
    title = payload.get("examTitle")
    if not isinstance(title, str):
        raise MalformedQuestionError("examTitle is required")
    entries = payload.get("questions")
    if not isinstance(entries, list):
        raise MalformedQuestionError("questions must be a list")

    questions = [parse_question(entry) for entry in entries]
    seen: set[int] = set()
    for question in questions:
        if question.id in seen:
            raise MalformedQuestionError(f"Duplicate question id {question.id}")
        seen.add(question.id)
    return QuestionBank(title=title, questions=questions)


def parse_settings(payload: dict[str, Any] | None) -> QuizSettings:
    """Read the camelCase settings document used by the setup screen."""
    payload = payload or {}
    try:
        mode = QuizMode(payload.get("mode") or QuizMode.ALL.value)
    except ValueError as exc:
        raise InvalidSettingsError(f"Unknown mode: {payload.get('mode')!r}") from exc

    count = payload.get("questionCount")
    if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
        raise InvalidSettingsError("questionCount must be an integer")

    ranges = []
    for item in payload.get("questionRanges") or []:
        if not isinstance(item, dict):
            raise InvalidSettingsError("questionRanges entries must be objects")
        start, end = item.get("start"), item.get("end")
        if any(isinstance(v, bool) or not isinstance(v, int) for v in (start, end)):
            raise InvalidSettingsError("questionRanges need integer start and end")
        ranges.append(QuestionRange(start, end))

    return QuizSettings(
        mode=mode,
        question_count=count,
        difficulty=payload.get("difficulty") or None,
        question_ranges=tuple(ranges),
        shuffle_questions=bool(payload.get("shuffleQuestions")),
        shuffle_options=bool(payload.get("shuffleOptions")),
    )


def serialize_settings(settings: QuizSettings) -> dict[str, Any]:
    return {
        "mode": settings.mode.value,
        "questionCount": settings.question_count,
        "difficulty": settings.difficulty.value if settings.difficulty else None,
        "questionRanges": [
            {"start": r.start, "end": r.end} for r in settings.question_ranges
        ],
        "shuffleQuestions": settings.shuffle_questions,
        "shuffleOptions": settings.shuffle_options,
    }


def serialize_question(question: Question) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": question.id,
        "type": question.kind,
        "difficulty": question.difficulty.value,
        "question": question.question,
    }
    if isinstance(question, MultipleChoiceQuestion):
        payload["options"] = list(question.options)
        payload["correctAnswer"] = question.correct_answer
    else:
        payload["correctAnswer"] = dict(question.correct_answer)
    payload["explanation"] = question.explanation
    payload["reference"] = question.reference
    return payload


def serialize_bank(bank: QuestionBank) -> dict[str, Any]:
    return {
        "examTitle": bank.title,
        "questions": [serialize_question(q) for q in bank.questions],
    }


def serialize_bank_metadata(filename: str, bank: QuestionBank) -> dict[str, Any]:
    return {
        "filename": filename,
        "title": bank.title,
        "questionCount": len(bank.questions),
        "difficulties": [d.value for d in bank.difficulties()],
    }


def serialize_session(session: Session) -> dict[str, Any]:
    """Questions in presentation order, with options already rearranged."""
    questions = []
    for question in session.questions:
        entry = serialize_question(question)
        if isinstance(question, MultipleChoiceQuestion):
            entry["options"] = session.display_options(question.id)
            entry["optionOrder"] = list(session.option_order(question.id))
        questions.append(entry)
    return {"examTitle": session.title, "questions": questions}


def serialize_question_result(answer: QuestionResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "questionId": answer.question_id,
        "type": answer.kind,
        "selectedAnswer": answer.selected_answer,
        "correctAnswer": answer.correct_answer,
        "isCorrect": answer.is_correct,
    }
    if answer.text_answer is not None:
        payload["textAnswer"] = answer.text_answer
    if answer.key_results is not None:
        payload["keyResults"] = answer.key_results
    return payload


def serialize_result(result: QuizResult) -> dict[str, Any]:
    return {
        "quizTitle": result.quiz_title,
        "totalQuestions": result.total_questions,
        "correctAnswers": result.correct_answers,
        "score": result.score,
        "passed": result.passed,
        "answers": [serialize_question_result(a) for a in result.answers],
    }
