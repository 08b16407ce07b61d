from pathlib import Path

import pytest
from fastapi import HTTPException

from api import config
from api.utils import json_utils, paths, validation


def test_json_round_trip(tmp_path: Path) -> None:
    payload = {"examTitle": "안전 관리", "count": 2}
    dumped = json_utils.json_dump(payload)
    assert "안전 관리" in dumped
    assert json_utils.json_load(dumped) == payload

    path = tmp_path / "payload.json"
    path.write_text(dumped, encoding="utf-8")
    assert json_utils.read_json_file(path, {}) == payload
    assert json_utils.read_json_file(tmp_path / "missing.json", {"fallback": True}) == {"fallback": True}


def test_paths_helpers(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "QUIZ_SETS_DIR", tmp_path)
    assert paths.quiz_sets_dir() == tmp_path
    assert paths.quiz_path("safety.json") == tmp_path / "safety.json"


def test_validate_filename() -> None:
    assert validation.validate_filename(" safety.json ") == "safety.json"
    for bad in ["", "   ", "../secret.json", "dir/quiz.json", "dir\\quiz.json", "quiz.txt"]:
        with pytest.raises(HTTPException):
            validation.validate_filename(bad)
