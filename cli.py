import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Callable, Optional

from api import config
from api.utils import json_dump
from core.answer_tracker import AnswerTracker
from core.bank_combiner import combine_banks
from core.errors import QuizError
from core.grader import check_answer, grade
from core.logging_setup import setup_console_logging
from core.session_builder import build_session
from models import (
    Difficulty,
    MultipleChoiceQuestion,
    QuestionBank,
    QuestionRange,
    QuizMode,
    QuizResult,
    QuizSettings,
    Session,
    ShortAnswerQuestion,
)
from serialization import parse_bank, serialize_result, serialize_settings

log = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands: <number> choose option, KEY=text or 'a' answer blanks, "
    "n next, p previous, g N go to question, c check answer, f finish, q quit"
)

Reader = Callable[[str], str]
Writer = Callable[[str], None]


def parse_range(value: str) -> QuestionRange:
    start, sep, end = value.partition("-")
    try:
        if not sep:
            return QuestionRange(int(start), int(start))
        return QuestionRange(int(start), int(end))
    except (ValueError, QuizError) as exc:
        raise argparse.ArgumentTypeError(f"Invalid range {value!r}, use START-END") from exc


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Take quizzes from JSON question banks")
    parser.add_argument(
        "--dir",
        type=Path,
        default=config.QUIZ_SETS_DIR,
        help="Directory with quiz set JSON files",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List available quiz sets")

    take = subparsers.add_parser("take", help="Take a quiz")
    take.add_argument("files", nargs="+", help="Quiz set file name(s); several are combined")
    take.add_argument(
        "--mode",
        choices=[mode.value for mode in QuizMode],
        default=QuizMode.ALL.value,
    )
    take.add_argument("--count", type=int, default=None, help="Number of questions")
    take.add_argument(
        "--difficulty",
        type=str,
        default=None,
        help="Difficulty filter for difficulty/custom mode (high, medium, low)",
    )
    take.add_argument(
        "--range",
        dest="ranges",
        type=parse_range,
        action="append",
        default=[],
        help="Question id range for range mode, e.g. 1-10 (repeatable)",
    )
    take.add_argument("--shuffle-questions", action="store_true")
    take.add_argument("--shuffle-options", action="store_true")
    take.add_argument("--seed", type=int, default=None, help="Seed for reproducible shuffles")
    take.add_argument("--json", action="store_true", help="Print the result as JSON")
    return parser.parse_args(argv)


def load_bank(path: Path) -> QuestionBank:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    return parse_bank(data)


def list_banks(directory: Path, write: Writer = print) -> int:
    files = sorted(directory.glob("*.json")) if directory.is_dir() else []
    if not files:
        write(f"No quiz sets found in {directory}")
        return 1
    for path in files:
        try:
            bank = load_bank(path)
        except (OSError, ValueError, QuizError) as exc:
            log.warning("Skipping %s: %s", path.name, exc)
            continue
        difficulties = ", ".join(d.value for d in bank.difficulties())
        write(f"{path.name}: {bank.title} ({len(bank)} questions; {difficulties})")
    return 0


def render_question(session: Session, tracker: AnswerTracker, write: Writer) -> None:
    question = tracker.current_question
    if question is None:
        return
    record = tracker.get_current(question.id)
    write("")
    write(
        f"Question {tracker.current_index + 1} of {len(session)} "
        f"[{question.difficulty.value}] "
        f"({tracker.answered_count()} / {len(session)} answered)"
    )
    write(question.question)
    if isinstance(question, MultipleChoiceQuestion):
        for index, option in enumerate(session.display_options(question.id)):
            marker = "*" if record.selected == index else " "
            write(f" {marker} {index + 1}. {option}")
    elif isinstance(question, ShortAnswerQuestion):
        for key in question.answer_keys:
            write(f"   {key}: {(record.text or {}).get(key, '')}")


def show_check(session: Session, tracker: AnswerTracker, write: Writer) -> None:
    question = tracker.current_question
    if question is None:
        return
    if not tracker.is_answered(question.id):
        write("Answer the question first.")
        return
    if check_answer(session, tracker, question.id):
        write("Correct!")
    elif isinstance(question, MultipleChoiceQuestion):
        display = session.to_display_index(question.id, question.correct_answer)
        write(f"Incorrect. Answer: {display + 1}. {question.options[question.correct_answer]}")
    else:
        expected = ", ".join(f"{k}: {v}" for k, v in question.correct_answer.items())
        write(f"Incorrect. Answer: {expected}")
    if question.explanation:
        write(f"Explanation: {question.explanation}")
    if question.reference:
        write(f"Reference: {question.reference}")


def answer_blanks(
    question: ShortAnswerQuestion, tracker: AnswerTracker, read: Reader
) -> None:
    for key in question.answer_keys:
        tracker.set_text(question.id, key, read(f"{key}: "))


def handle_command(
    command: str,
    session: Session,
    tracker: AnswerTracker,
    read: Reader,
    write: Writer,
) -> Optional[str]:
    """Apply one command. Returns "finish" or "quit" when the loop should stop."""
    question = tracker.current_question
    if command in ("f", "finish"):
        unanswered = len(tracker.unanswered_ids())
        if unanswered:
            confirm = read(f"{unanswered} question(s) unanswered. Finish anyway? [y/N] ")
            if confirm.strip().lower() != "y":
                return None
        return "finish"
    if command in ("q", "quit"):
        return "quit"
    if command in ("n", "next"):
        if not tracker.go_next():
            write("This is the last question.")
    elif command in ("p", "prev"):
        if not tracker.go_previous():
            write("This is the first question.")
    elif command.startswith("g "):
        tracker.jump_to(int(command[2:].strip()) - 1)
    elif command in ("c", "check"):
        show_check(session, tracker, write)
        return None
    elif command.isdigit() and isinstance(question, MultipleChoiceQuestion):
        tracker.set_selection(question.id, int(command) - 1)
    elif command == "a" and isinstance(question, ShortAnswerQuestion):
        answer_blanks(question, tracker, read)
    elif "=" in command and isinstance(question, ShortAnswerQuestion):
        key, _, value = command.partition("=")
        tracker.set_text(question.id, key.strip(), value)
    else:
        write(HELP_TEXT)
        return None
    render_question(session, tracker, write)
    return None


def run_quiz(
    session: Session,
    read: Reader = input,
    write: Writer = print,
) -> Optional[QuizResult]:
    """Interactive loop over a session. Returns None if the user quits."""
    tracker = AnswerTracker(session)
    write(session.title)
    write(HELP_TEXT)
    render_question(session, tracker, write)
    while True:
        try:
            command = read("> ").strip()
        except EOFError:
            break
        try:
            outcome = handle_command(command, session, tracker, read, write)
        except EOFError:
            break
        except (QuizError, ValueError) as exc:
            write(f"Error: {exc}")
            continue
        if outcome == "quit":
            return None
        if outcome == "finish":
            break
    return grade(session, tracker)


def print_result(result: QuizResult, write: Writer = print) -> None:
    write("")
    write(result.quiz_title)
    write(
        f"Score: {result.score} ({result.correct_answers} / {result.total_questions} correct, "
        f"{result.incorrect_answers} incorrect)"
    )
    write("PASSED" if result.passed else "FAILED")
    for answer in result.answers:
        mark = "O" if answer.is_correct else "X"
        if answer.key_results is not None:
            given = answer.text_answer or {}
            details = ", ".join(
                f"{key}: {given.get(key, '')!r} -> {expected!r}"
                for key, expected in answer.correct_answer.items()
            )
        else:
            chosen = "-" if answer.selected_answer is None else answer.selected_answer + 1
            details = f"chosen {chosen}, answer {answer.correct_answer + 1}"
        write(f" [{mark}] Question {answer.question_id}: {details}")


def build_settings(args: argparse.Namespace) -> QuizSettings:
    return QuizSettings(
        mode=QuizMode(args.mode),
        question_count=args.count,
        difficulty=Difficulty.parse(args.difficulty) if args.difficulty else None,
        question_ranges=tuple(args.ranges),
        shuffle_questions=args.shuffle_questions,
        shuffle_options=args.shuffle_options,
    )


def take_quiz(
    args: argparse.Namespace,
    read: Reader = input,
    write: Writer = print,
) -> int:
    try:
        banks = [load_bank(args.dir / name) for name in args.files]
        bank = (
            banks[0]
            if len(banks) == 1
            else combine_banks(banks, config.COMBINED_TITLE_FORMAT)
        )
        settings = build_settings(args)
    except (OSError, ValueError, QuizError) as exc:
        write(f"Error: {exc}")
        return 1

    rng = random.Random(args.seed) if args.seed is not None else None
    session = build_session(bank, settings, rng)
    if session.is_empty:
        write("There are no questions matching these settings.")
        return 1

    result = run_quiz(session, read, write)
    if result is None:
        write("Quiz abandoned.")
        return 1
    if args.json:
        payload = serialize_result(result)
        payload["settings"] = serialize_settings(settings)
        write(json_dump(payload))
    else:
        print_result(result, write)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    setup_console_logging(config.LOG_LEVEL)
    args = parse_args(argv)
    if args.command == "list":
        return list_banks(args.dir)
    return take_quiz(args)


if __name__ == "__main__":
    sys.exit(main())
