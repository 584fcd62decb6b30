"""Exceptions raised while loading and running quiz sets."""

from __future__ import annotations

__all__ = [
    "AskmeError",
    "QuestionSetError",
    "ContentError",
    "EmptySetError",
    "EmptyAnswersError",
    "AggregationError",
]


class AskmeError(RuntimeError):
    """Base class for askme failures reported to the user."""


class QuestionSetError(AskmeError):
    """Raised when a question set file cannot be read, parsed or validated."""


class ContentError(AskmeError):
    """Raised when a well-formed question set cannot be quizzed on."""


class EmptySetError(ContentError):
    """Raised when a question set has no questions."""


class EmptyAnswersError(ContentError):
    """Raised when a question lists no accepted answers."""


class AggregationError(ContentError):
    """Raised when candidate answers cannot be assembled from the pool."""
