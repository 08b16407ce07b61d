import json
from pathlib import Path

import pytest


def write_quiz_file(path: Path, payload: dict) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def quiz_sets_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    from api import config

    directory = tmp_path / "quiz_sets"
    directory.mkdir()
    monkeypatch.setattr(config, "QUIZ_SETS_DIR", directory)
    write_quiz_file(
        directory / "safety.json",
        {
            "examTitle": "Safety",
            "questions": [
                {
                    "id": 1,
                    "difficulty": "상",
                    "question": "Pick B",
                    "options": ["A", "B", "C"],
                    "correctAnswer": 1,
                    "explanation": "B is right",
                    "reference": "Ch. 1",
                },
                {
                    "id": 2,
                    "type": "short_answer",
                    "difficulty": "하",
                    "question": "Fill in the blanks",
                    "correctAnswer": {"ㄱ": "foo", "ㄴ": "bar"},
                    "explanation": "",
                    "reference": "",
                },
            ],
        },
    )
    write_quiz_file(
        directory / "basics.json",
        {
            "examTitle": "Basics",
            "questions": [
                {
                    "id": 7,
                    "difficulty": "medium",
                    "question": "Pick A",
                    "options": ["A", "B"],
                    "correctAnswer": 0,
                },
            ],
        },
    )
    return directory
