"""Rich-powered quiz session driver.

`QuizSession` walks a question set in one of the drill modes, reads one
answer per question from an input provider, scores it and renders feedback.
Keyboard interrupts and end-of-input from the provider are not handled here:
they propagate so the CLI can abort without printing anything else.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from rich.console import Console

from .config import QuizSettings
from .errors import EmptySetError
from .manager.answers import AggregatedAnswers, aggregate_answers, matches
from .models import Question, QuestionSet, QuizMode
from .utils import letter_for, parse_choice, parse_yes_no, shuffled, wait_for
from .view.console import (
    InputProvider,
    console_input_provider,
    render_banner,
    render_candidate,
    render_choices,
    render_feedback,
    render_invalid,
    render_question,
    render_score,
    render_warning,
)

logger = logging.getLogger(__name__)

Sleeper = Callable[[float], None]


@dataclass(frozen=True)
class QuestionResponse:
    """A scored reply to one question."""

    question: str
    response: str
    expected: tuple[str, ...]
    is_correct: bool


@dataclass(frozen=True)
class QuizSummary:
    total_questions: int
    correct_answers: int

    @property
    def accuracy(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return self.correct_answers / self.total_questions


@dataclass(frozen=True)
class QuizSessionResult:
    """Return value of :meth:`QuizSession.run`."""

    responses: list[QuestionResponse]
    summary: QuizSummary


def summarize(responses: Sequence[QuestionResponse]) -> QuizSummary:
    return QuizSummary(
        total_questions=len(responses),
        correct_answers=sum(1 for r in responses if r.is_correct),
    )


class QuizSession:
    """Drive one run over a question set."""

    def __init__(
        self,
        question_set: QuestionSet,
        settings: QuizSettings | None = None,
        *,
        mode: QuizMode = QuizMode.MEMORIZE,
        console: Console | None = None,
        input_provider: InputProvider | None = None,
        rng: random.Random | None = None,
        sleep: Sleeper = time.sleep,
    ) -> None:
        self.question_set = question_set
        self.settings = settings or QuizSettings()
        self.mode = mode
        self.console = console or Console()
        self.input_provider = input_provider or console_input_provider(
            self.console
        )
        self.rng = rng or random.Random(self.settings.seed)
        self.sleep = sleep
        self.responses: list[QuestionResponse] = []
        self._warned_clamp = False

    @property
    def pool(self) -> tuple[Question, ...]:
        return self.question_set.questions

    def run(self) -> QuizSessionResult:
        if not self.pool:
            raise EmptySetError("No questions provided!")

        logger.info(
            "Starting quiz session",
            extra={
                "mode": self.mode.value,
                "title": self.question_set.title,
                "question_count": len(self.pool),
                "shuffle": self.settings.shuffle,
                "loop_questions": self.settings.loop_questions,
            },
        )
        render_banner(
            self.console, self.question_set.title, self.question_set.subtitle
        )

        self.responses = []
        order = self._ordered_questions()
        index = 0
        while True:
            self.responses.append(
                self.ask(order[index], index + 1, len(order))
            )
            wait_for(self.settings.wait_duration, self.sleep)
            index += 1
            if index < len(order):
                continue
            if not self.settings.loop_questions:
                break
            index = 0
            if self.settings.shuffle:
                order = self._ordered_questions()

        summary = summarize(self.responses)
        render_score(
            self.console, summary.correct_answers, summary.total_questions
        )
        logger.info(
            "Finished quiz session",
            extra={
                "mode": self.mode.value,
                "correct": summary.correct_answers,
                "total": summary.total_questions,
            },
        )
        return QuizSessionResult(list(self.responses), summary)

    def ask(
        self, question: Question, position: int, total: int
    ) -> QuestionResponse:
        """Present ``question``, read a reply and render feedback."""

        render_question(self.console, position, total, question.title)
        if self.mode is QuizMode.MULTICHOICE:
            return self._ask_multichoice(question)
        if self.mode is QuizMode.TRUEFALSE:
            return self._ask_truefalse(question)
        return self._ask_memorize(question)

    def _ordered_questions(self) -> list[Question]:
        if self.settings.shuffle:
            return shuffled(self.pool, self.rng)
        return list(self.pool)

    def _read(self) -> str:
        return self.input_provider()

    def _ask_memorize(self, question: Question) -> QuestionResponse:
        raw = self._read()
        while not raw.strip():
            raw = self._read()
        correct = matches(
            raw, question.answers, case_sensitive=self.settings.case_sensitive
        )
        reveal = None
        if self.settings.show_correct:
            if len(question.answers) == 1:
                reveal = f"The correct answer is: {question.answers[0]}"
            else:
                reveal = "The correct answers are: " + ", ".join(
                    question.answers
                )
        render_feedback(self.console, correct, reveal)
        return QuestionResponse(
            question=question.title,
            response=raw.strip(),
            expected=question.answers,
            is_correct=correct,
        )

    def _ask_multichoice(self, question: Question) -> QuestionResponse:
        candidates = self._aggregate(question, self.settings.max_choices)
        render_choices(
            self.console, candidates.choices, columns=self.settings.columns
        )
        while True:
            raw = self._read()
            selected = parse_choice(raw, candidates.size)
            if selected is not None:
                break
            if raw.strip():
                last = letter_for(candidates.size - 1)
                render_invalid(
                    self.console,
                    f"'{raw.strip()}' is not a valid choice (a-{last}).",
                )
        correct = selected == candidates.correct_index
        reveal = None
        if self.settings.show_correct:
            reveal = "The correct option is: {0}".format(
                letter_for(candidates.correct_index)
            )
        render_feedback(self.console, correct, reveal)
        return QuestionResponse(
            question=question.title,
            response=candidates.choices[selected],
            expected=(candidates.correct_answer,),
            is_correct=correct,
        )

    def _ask_truefalse(self, question: Question) -> QuestionResponse:
        candidates = self._aggregate(question, 2)
        shown = self.rng.randrange(candidates.size)
        truth = shown == candidates.correct_index
        render_candidate(self.console, candidates.choices[shown])
        while True:
            raw = self._read()
            reply = parse_yes_no(raw)
            if reply is not None:
                break
            if raw.strip():
                render_invalid(self.console, "Please answer y or n.")
        correct = reply == truth
        reveal = None
        if self.settings.show_correct:
            reveal = f"The correct answer is: {candidates.correct_answer}"
        render_feedback(self.console, correct, reveal)
        return QuestionResponse(
            question=question.title,
            response="yes" if reply else "no",
            expected=("yes" if truth else "no",),
            is_correct=correct,
        )

    def _aggregate(self, question: Question, size: int) -> AggregatedAnswers:
        candidates = aggregate_answers(question, self.pool, size, rng=self.rng)
        if (
            candidates.clamped
            and self.mode is QuizMode.MULTICHOICE
            and not self._warned_clamp
        ):
            self._warned_clamp = True
            render_warning(
                self.console,
                "only {0} distinct answer(s) available, showing {0} instead "
                "of {1} choices.".format(
                    candidates.size, candidates.requested_size
                ),
            )
        return candidates
