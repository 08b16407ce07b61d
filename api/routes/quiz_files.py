"""Quiz set endpoints."""
from fastapi import APIRouter

from api.models import CombinedQuizRequest, QuizFileInfo
from api.services.quiz_service import (
    list_quiz_metadata,
    load_combined_quiz,
    load_quiz,
)
from serialization import serialize_bank

router = APIRouter(prefix="/api/quiz-files", tags=["quiz-files"])


@router.get("", response_model=list[QuizFileInfo])
def list_quiz_files() -> list[dict[str, object]]:
    """List available quiz sets with question counts and difficulties."""
    return list_quiz_metadata()


@router.post("/combined")
def get_combined_quiz(payload: CombinedQuizRequest) -> dict[str, object]:
    """Merge the selected quiz sets into one quiz."""
    return serialize_bank(load_combined_quiz(payload.filenames))


@router.get("/{filename}")
def get_quiz(filename: str) -> dict[str, object]:
    """Get one quiz set."""
    return serialize_bank(load_quiz(filename))
