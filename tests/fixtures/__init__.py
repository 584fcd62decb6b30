"""Shared testing helpers for the askme test suite."""

from .question_sets import (  # noqa: F401
    QuestionSetWriter,
    make_set,
    scripted_input,
)

__all__ = [
    "QuestionSetWriter",
    "make_set",
    "scripted_input",
]
