"""Pydantic models."""
from api.models.quiz_files import CombinedQuizRequest, QuizFileInfo

__all__ = ["CombinedQuizRequest", "QuizFileInfo"]
