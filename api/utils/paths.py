"""Path utilities for quiz sets."""
from pathlib import Path

from api import config


def quiz_sets_dir() -> Path:
    """Get directory holding quiz set JSON files."""
    return config.QUIZ_SETS_DIR


def quiz_path(filename: str) -> Path:
    """Get path to a quiz set file."""
    return quiz_sets_dir() / filename
