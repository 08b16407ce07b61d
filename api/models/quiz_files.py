"""Quiz set Pydantic models."""
from pydantic import BaseModel, Field


class QuizFileInfo(BaseModel):
    """Listing entry for one quiz set."""

    filename: str
    title: str
    questionCount: int
    difficulties: list[str] = Field(default_factory=list)


class CombinedQuizRequest(BaseModel):
    """Model for requesting a combined quiz."""

    filenames: list[str] = Field(default_factory=list)
