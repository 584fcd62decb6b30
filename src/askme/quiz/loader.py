"""Read askme question sets from YAML files.

A question set looks like::

    title: Capitals
    subtitle: European capitals
    questions:
      - title: Capital of France?
        answers: [Paris]

Every failure is raised as :class:`QuestionSetError` (or
:class:`EmptyAnswersError` for a question without answers) with the
underlying cause chained.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .errors import EmptyAnswersError, QuestionSetError
from .models import Question, QuestionSet

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_question_set(path: PathLike) -> QuestionSet:
    """Load and validate the question set stored at ``path``."""

    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise QuestionSetError(f"Question set not found: {source}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise QuestionSetError(
            f"Failed to read question set {source}: {exc}"
        ) from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise QuestionSetError(
            f"Failed to parse question set {source}: {exc}"
        ) from exc

    question_set = parse_question_set(data, source=source)
    logger.info(
        "Loaded question set",
        extra={
            "source": str(source),
            "title": question_set.title,
            "question_count": len(question_set),
        },
    )
    return question_set


def parse_question_set(
    data: Any, *, source: Optional[PathLike] = None
) -> QuestionSet:
    """Build a :class:`QuestionSet` from already-deserialized data."""

    where = f" in {source}" if source is not None else ""
    if not isinstance(data, Mapping):
        raise QuestionSetError(
            f"Expected a mapping at the top level{where}, found "
            f"{type(data).__name__}."
        )

    title = _require_text(data, "title", f"question set{where}")
    subtitle = _require_text(data, "subtitle", f"question set{where}")

    raw_questions = data.get("questions")
    if raw_questions is None:
        raise QuestionSetError(
            f"Missing 'questions' field for question set{where}."
        )
    if not isinstance(raw_questions, list):
        raise QuestionSetError(
            f"'questions' must be a list{where}, found "
            f"{type(raw_questions).__name__}."
        )

    questions = tuple(
        _parse_question(item, position, where)
        for position, item in enumerate(raw_questions, start=1)
    )
    return QuestionSet(title=title, subtitle=subtitle, questions=questions)


def _parse_question(item: Any, position: int, where: str) -> Question:
    label = f"question #{position}{where}"
    if not isinstance(item, Mapping):
        raise QuestionSetError(
            f"Expected {label} to be a mapping, found {type(item).__name__}."
        )
    title = _require_text(item, "title", label)

    answers = item.get("answers")
    if not isinstance(answers, list):
        raise QuestionSetError(
            f"'answers' of {label} must be a list, found "
            f"{type(answers).__name__}."
        )
    if not answers:
        raise EmptyAnswersError(f"{label.capitalize()} has no answers.")
    for answer in answers:
        if not isinstance(answer, str):
            raise QuestionSetError(
                f"Answers of {label} must be strings, found "
                f"{type(answer).__name__} ({answer!r})."
            )
    return Question(title=title, answers=tuple(answers))


def _require_text(data: Mapping[str, Any], key: str, label: str) -> str:
    if key not in data:
        raise QuestionSetError(f"Missing '{key}' field for {label}.")
    value = data[key]
    if not isinstance(value, str):
        raise QuestionSetError(
            f"'{key}' of {label} must be a string, found "
            f"{type(value).__name__}."
        )
    return value
