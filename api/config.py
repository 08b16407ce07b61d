"""Application configuration and constants."""
import os
from pathlib import Path


def _env_list(name: str, default: str) -> list[str]:
    """Parse a ;-separated list from environment variable."""
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(";") if item.strip()]


# Directories
QUIZ_SETS_DIR = Path(
    os.environ.get("QUIZ_SETS_DIR", Path.cwd() / "public" / "quiz_sets")
)

# Logging
LOG_LEVEL = os.environ.get("QUIZ_LOG_LEVEL", "INFO").upper()

# Combined quizzes
COMBINED_TITLE_FORMAT = os.environ.get(
    "COMBINED_TITLE_FORMAT", "Combined Exam ({titles})"
)

# CORS
CORS_ALLOW_ORIGINS = _env_list("CORS_ALLOW_ORIGINS", "*")
