"""Utility modules."""
from api.utils.json_utils import (
    json_dump,
    json_load,
    read_json_file,
)
from api.utils.paths import quiz_path, quiz_sets_dir
from api.utils.validation import validate_filename

__all__ = [
    "json_dump",
    "json_load",
    "read_json_file",
    "quiz_path",
    "quiz_sets_dir",
    "validate_filename",
]
