from __future__ import annotations

import random

import pytest
from rich.console import Console

from askme.quiz.config import QuizSettings
from askme.quiz.errors import EmptySetError
from askme.quiz.manager.answers import aggregate_answers
from askme.quiz.models import QuizMode
from askme.quiz.session import QuizSession, QuizSessionResult, QuizSummary
from askme.quiz.utils import letter_for, shuffled
from askme.quiz.view.console import render_choices

from fixtures import make_set, scripted_input


def _console() -> Console:
    return Console(record=True, width=120, force_terminal=True)


def _settings(**kwargs) -> QuizSettings:
    kwargs.setdefault("wait_duration", 0)
    return QuizSettings(**kwargs)


CAPITALS = make_set(
    [
        ("Capital of France?", ["Paris"]),
        ("Capital of England?", ["London"]),
    ]
)


# ---------------------- memorize ----------------------


def test_memorize_all_correct_reports_full_score() -> None:
    console = _console()
    pauses: list[float] = []
    session = QuizSession(
        CAPITALS,
        _settings(wait_duration=0.5),
        console=console,
        input_provider=scripted_input(["paris", "  London "]),
        sleep=pauses.append,
    )

    result = session.run()

    assert isinstance(result, QuizSessionResult)
    assert result.summary == QuizSummary(total_questions=2, correct_answers=2)
    assert result.summary.accuracy == 1.0
    assert [r.is_correct for r in result.responses] == [True, True]
    assert pauses == [0.5, 0.5]
    output = console.export_text()
    assert "Capitals" in output
    assert "Test drill" in output
    assert "Correct answers: 2/2" in output
    assert "That's correct!" in output


def test_memorize_case_sensitive_rejects_wrong_case_and_reveals() -> None:
    console = _console()
    session = QuizSession(
        CAPITALS,
        _settings(case_sensitive=True, show_correct=True),
        console=console,
        input_provider=scripted_input(["paris", "London"]),
    )

    result = session.run()

    assert result.summary.correct_answers == 1
    output = console.export_text()
    assert "Not quite correct" in output
    assert "The correct answer is: Paris" in output
    assert "Correct answers: 1/2" in output


def test_memorize_hides_answers_without_show_correct() -> None:
    console = _console()
    session = QuizSession(
        CAPITALS,
        _settings(),
        console=console,
        input_provider=scripted_input(["Lyon", "Leeds"]),
    )

    result = session.run()

    assert result.summary.correct_answers == 0
    assert "The correct answer" not in console.export_text()


def test_memorize_lists_all_accepted_answers_on_reveal() -> None:
    console = _console()
    qs = make_set([("2 + 2?", ["4", "four"])])
    session = QuizSession(
        qs,
        _settings(show_correct=True),
        console=console,
        input_provider=scripted_input(["5"]),
    )

    session.run()

    assert "The correct answers are: 4, four" in console.export_text()


def test_memorize_reprompts_on_blank_input() -> None:
    session = QuizSession(
        make_set([("Capital of France?", ["Paris"])]),
        _settings(),
        console=_console(),
        input_provider=scripted_input(["", "   ", "Paris"]),
    )

    result = session.run()

    assert result.responses[0].response == "Paris"
    assert result.summary.correct_answers == 1


def test_empty_set_raises_before_rendering() -> None:
    console = _console()
    session = QuizSession(
        make_set([]), _settings(), console=console, input_provider=lambda: ""
    )

    with pytest.raises(EmptySetError):
        session.run()

    assert console.export_text() == ""


def test_shuffle_uses_seeded_order() -> None:
    qs = make_set([(f"Q{i}", [str(i)]) for i in range(8)])
    expected = shuffled(qs.questions, random.Random(7))
    replies = [q.answers[0] for q in expected]
    session = QuizSession(
        qs,
        _settings(shuffle=True),
        console=_console(),
        input_provider=scripted_input(replies),
        rng=random.Random(7),
    )

    result = session.run()

    assert [r.question for r in result.responses] == [q.title for q in expected]
    assert result.summary.correct_answers == 8


def test_loop_repeats_until_interrupted_without_summary() -> None:
    console = _console()
    replies = ["Paris", "London", "Paris", KeyboardInterrupt()]
    session = QuizSession(
        CAPITALS,
        _settings(loop_questions=True),
        console=console,
        input_provider=scripted_input(replies),
    )

    with pytest.raises(KeyboardInterrupt):
        session.run()

    assert len(session.responses) == 3
    assert all(r.is_correct for r in session.responses)
    output = console.export_text()
    assert output.count("Capital of France?") == 2
    assert "Correct answers:" not in output


def test_loop_reshuffles_on_wrap() -> None:
    qs = make_set([(f"Q{i}", [str(i)]) for i in range(6)])
    rng = random.Random(11)
    first = shuffled(qs.questions, rng)
    second = shuffled(qs.questions, rng)
    replies = [q.answers[0] for q in first + second] + [EOFError()]
    console = _console()
    session = QuizSession(
        qs,
        _settings(loop_questions=True, shuffle=True),
        console=console,
        input_provider=scripted_input(replies),
        rng=random.Random(11),
    )

    with pytest.raises(EOFError):
        session.run()

    assert [r.question for r in session.responses] == [
        q.title for q in first + second
    ]
    assert all(r.is_correct for r in session.responses)


# ---------------------- multichoice ----------------------


POOL = make_set(
    [
        ("Capital of France?", ["Paris"]),
        ("Capital of England?", ["London"]),
        ("Capital of Japan?", ["Tokyo"]),
        ("Capital of Italy?", ["Rome"]),
        ("Capital of Spain?", ["Madrid"]),
    ]
)


def test_multichoice_scores_selected_letter() -> None:
    rng = random.Random(3)
    expected = [
        aggregate_answers(q, POOL.questions, 4, rng=rng)
        for q in POOL.questions
    ]
    wrong = (expected[1].correct_index + 1) % 4
    replies = [
        letter_for(expected[0].correct_index),
        letter_for(wrong).upper(),
        *[letter_for(e.correct_index) for e in expected[2:]],
    ]
    console = _console()
    session = QuizSession(
        POOL,
        _settings(show_correct=True),
        mode=QuizMode.MULTICHOICE,
        console=console,
        input_provider=scripted_input(replies),
        rng=random.Random(3),
    )

    result = session.run()

    assert result.summary.correct_answers == 4
    assert result.responses[1].is_correct is False
    assert result.responses[1].expected == ("London",)
    output = console.export_text()
    assert "a. " in output and "d. " in output
    assert (
        f"The correct option is: {letter_for(expected[1].correct_index)}"
        in output
    )
    assert "Correct answers: 4/5" in output


def test_multichoice_rejects_letters_outside_range() -> None:
    qs = make_set([("Capital of France?", ["Paris"]), ("Capital of Peru?", ["Lima"])])
    console = _console()
    session = QuizSession(
        qs,
        _settings(max_choices=2),
        mode=QuizMode.MULTICHOICE,
        console=console,
        input_provider=scripted_input(["z", "", "a", "a"]),
        rng=random.Random(0),
    )

    result = session.run()

    assert len(result.responses) == 2
    assert "'z' is not a valid choice (a-b)" in console.export_text()


def test_multichoice_warns_once_when_choices_are_clamped() -> None:
    qs = make_set([("Only question", ["Only answer"])])
    console = _console()
    session = QuizSession(
        qs,
        _settings(loop_questions=True),
        mode=QuizMode.MULTICHOICE,
        console=console,
        input_provider=scripted_input(["a", "a", KeyboardInterrupt()]),
    )

    with pytest.raises(KeyboardInterrupt):
        session.run()

    output = console.export_text()
    assert output.count("[!] warning:") == 1
    assert "showing 1 instead of 4" in output
    assert len(session.responses) == 2
    assert all(r.is_correct for r in session.responses)


def test_render_choices_fills_rows_left_to_right() -> None:
    console = _console()

    render_choices(console, ["Paris", "London", "Tokyo", "Rome", "Lima"], columns=2)

    lines = [ln for ln in console.export_text().splitlines() if ln.strip()]
    assert len(lines) == 3
    assert "a. Paris" in lines[0] and "b. London" in lines[0]
    assert "c. Tokyo" in lines[1] and "d. Rome" in lines[1]
    assert "e. Lima" in lines[2]


# ---------------------- truefalse ----------------------


def test_truefalse_scores_yes_no_against_candidate() -> None:
    rng = random.Random(5)
    replies = []
    for q in POOL.questions:
        candidates = aggregate_answers(q, POOL.questions, 2, rng=rng)
        shown = rng.randrange(candidates.size)
        replies.append("y" if shown == candidates.correct_index else "n")
    console = _console()
    session = QuizSession(
        POOL,
        _settings(),
        mode=QuizMode.TRUEFALSE,
        console=console,
        input_provider=scripted_input(replies),
        rng=random.Random(5),
    )

    result = session.run()

    assert result.summary.correct_answers == 5
    assert "Proposed answer:" in console.export_text()


def test_truefalse_reprompts_and_reveals() -> None:
    qs = make_set([("Capital of France?", ["Paris"])])
    console = _console()
    session = QuizSession(
        qs,
        _settings(show_correct=True),
        mode=QuizMode.TRUEFALSE,
        console=console,
        input_provider=scripted_input(["maybe", "n"]),
    )

    result = session.run()

    output = console.export_text()
    assert "Please answer y or n." in output
    assert "Proposed answer: Paris" in output
    assert result.summary.correct_answers == 0
    assert "The correct answer is: Paris" in output
