"""Rich rendering helpers for the askme drills."""

from __future__ import annotations

from typing import Callable, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..utils import letter_for

CORRECT_FEEDBACK = "✔ That's correct!"
INCORRECT_FEEDBACK = "✘ Not quite correct.."

InputProvider = Callable[[], str]


def console_input_provider(
    console: Console, label: str = "Answer"
) -> InputProvider:
    """Read one line from ``console`` per call, prefixed by ``label``."""

    def _provider() -> str:
        return console.input(f"[bold]{label}:[/] ")

    return _provider


def render_banner(console: Console, title: str, subtitle: str) -> None:
    console.print(
        Panel(
            Text(title, style="bold cyan", justify="center"),
            box=box.DOUBLE,
            border_style="cyan",
        )
    )
    if subtitle:
        console.print(Text(f" {subtitle}", style="blue"))
    console.print()


def render_question(
    console: Console, position: int, total: int, title: str
) -> None:
    header = Text.assemble(
        (f"Question {position}", "bold cyan"),
        (f" / {total}", "dim"),
    )
    console.rule(header)
    console.print(Text(title, style="bold"))


def render_choices(
    console: Console, choices: Sequence[str], columns: int = 2
) -> None:
    """Print ``choices`` as ``a. text`` cells, filling rows left to right."""

    columns = max(1, min(columns, len(choices) or 1))
    grid = Table.grid(padding=(0, 4))
    for _ in range(columns):
        grid.add_column()
    for start in range(0, len(choices), columns):
        row = [
            Text.assemble(
                (f"{letter_for(idx)}. ", "bold cyan"), choices[idx]
            )
            for idx in range(start, min(start + columns, len(choices)))
        ]
        row.extend(Text("") for _ in range(columns - len(row)))
        grid.add_row(*row)
    console.print(grid)


def render_candidate(console: Console, candidate: str) -> None:
    console.print(
        Text.assemble(("Proposed answer: ", "dim"), (candidate, "bold"))
    )
    console.print(Text("Is this correct? (y/n)", style="dim"))


def render_feedback(
    console: Console, correct: bool, reveal: str | None = None
) -> None:
    if correct:
        console.print(Text(CORRECT_FEEDBACK, style="bold green"))
    else:
        console.print(Text(INCORRECT_FEEDBACK, style="bold red"))
        if reveal:
            console.print(Text(reveal, style="red"))
    console.print()


def render_invalid(console: Console, message: str) -> None:
    console.print(Text(message, style="red"))


def render_warning(console: Console, message: str) -> None:
    console.print(
        Text.assemble(("[!] warning: ", "bold"), (message, "yellow"))
    )


def render_error(console: Console, message: str) -> None:
    console.print(Text.assemble(("[!!] error: ", "bold red"), message))


def render_score(console: Console, correct: int, total: int) -> None:
    console.print(
        Text(f" Correct answers: {correct}/{total}", style="bright_magenta")
    )
