"""Service layer for loading quiz sets from the quiz-sets directory."""
import json
import logging

from fastapi import HTTPException

from api import config
from api.utils import quiz_path, quiz_sets_dir, read_json_file, validate_filename
from api.utils.validation import QUIZ_FILE_SUFFIX
from core.bank_combiner import combine_banks
from core.errors import EmptyInputError, MalformedQuestionError
from models import QuestionBank
from serialization import parse_bank, serialize_bank_metadata

logger = logging.getLogger(__name__)


def list_quiz_files() -> list[dict[str, str]]:
    """List quiz set files with a title derived from the filename."""
    directory = quiz_sets_dir()
    if not directory.is_dir():
        logger.warning("Quiz sets directory not found: %s", directory)
        return []
    return [
        {"filename": path.name, "title": path.stem}
        for path in sorted(directory.iterdir())
        if path.is_file() and path.suffix == QUIZ_FILE_SUFFIX
    ]


def load_quiz(filename: str) -> QuestionBank:
    """Load and validate one quiz set."""
    filename = validate_filename(filename)
    path = quiz_path(filename)
    if not path.exists():
        raise HTTPException(status_code=404, detail="Quiz not found")
    try:
        return parse_bank(read_json_file(path, None))
    except json.JSONDecodeError as exc:
        logger.error("Invalid JSON in quiz %s: %s", filename, exc)
        raise HTTPException(status_code=422, detail=f"Invalid JSON in {filename}") from exc
    except (UnicodeDecodeError, OSError) as exc:
        logger.error("Cannot read quiz %s: %s", filename, exc)
        raise HTTPException(status_code=422, detail=f"Cannot read {filename}") from exc
    except MalformedQuestionError as exc:
        logger.error("Malformed quiz %s: %s", filename, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def list_quiz_metadata() -> list[dict[str, object]]:
    """Metadata for every readable quiz set; broken files are skipped."""
    items = []
    for entry in list_quiz_files():
        try:
            bank = load_quiz(entry["filename"])
        except HTTPException as exc:
            logger.warning("Skipping quiz %s: %s", entry["filename"], exc.detail)
            continue
        items.append(serialize_bank_metadata(entry["filename"], bank))
    return items


def load_combined_quiz(filenames: list[str]) -> QuestionBank:
    """Load several quiz sets and merge them into one bank."""
    banks = [load_quiz(filename) for filename in filenames]
    try:
        return combine_banks(banks, config.COMBINED_TITLE_FORMAT)
    except EmptyInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
