"""Validation utilities."""
from pathlib import Path

from fastapi import HTTPException

QUIZ_FILE_SUFFIX = ".json"


def validate_filename(value: str) -> str:
    """Validate quiz filename (no path traversal, .json only)."""
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail="filename is required")
    cleaned = value.strip()
    if not cleaned:
        raise HTTPException(status_code=400, detail="filename is required")
    if Path(cleaned).name != cleaned or "/" in cleaned or "\\" in cleaned:
        raise HTTPException(status_code=400, detail="Invalid filename")
    if not cleaned.endswith(QUIZ_FILE_SUFFIX):
        raise HTTPException(status_code=400, detail="Quiz files must be .json")
    return cleaned
