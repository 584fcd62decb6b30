from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Question:
    """A prompt and the answers accepted for it."""

    title: str
    answers: tuple[str, ...]


@dataclass(frozen=True)
class QuestionSet:
    """Questions loaded from one askme file plus its display metadata."""

    title: str
    subtitle: str
    questions: tuple[Question, ...]

    def __len__(self) -> int:
        return len(self.questions)


class QuizMode(Enum):
    """Ways a question set can be drilled."""

    MEMORIZE = "memorize"
    TRUEFALSE = "truefalse"
    MULTICHOICE = "multichoice"

    @classmethod
    def from_value(cls, value: str) -> "QuizMode":
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        expected = ", ".join(member.value for member in cls)
        raise ValueError(
            f"Unknown quiz mode '{value}'. Expected one of: {expected}."
        )
