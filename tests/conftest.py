from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import QuestionSetWriter  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_askme_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Keep workspace writes under tmp and drop ASKME_* from the real env."""

    for key in [k for k in os.environ if k.startswith("ASKME_")]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ASKME_DATA_HOME", str(tmp_path / "askme-data"))
    yield
    logger = logging.getLogger("askme")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def question_files(tmp_path: Path) -> QuestionSetWriter:
    """Write YAML question sets into the per-test tmp directory."""

    return QuestionSetWriter(tmp_path / "sets")


@pytest.fixture
def capitals_data() -> dict:
    return {
        "title": "Capitals",
        "subtitle": "European capitals",
        "questions": [
            {"title": "Capital of France?", "answers": ["Paris"]},
            {"title": "Capital of England?", "answers": ["London"]},
        ],
    }
