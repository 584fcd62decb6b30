"""Unified `askme` entry point dispatching to the drill modes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from importlib import import_module, metadata
from typing import Callable, Iterable, Mapping, Optional, Sequence


CommandHandler = Callable[[Sequence[str]], int]


@dataclass(frozen=True)
class CommandSpec:
    """An `askme` subcommand and the handler implementing it."""

    name: str
    summary: str
    handler: CommandHandler


_COMMAND_SPECS: Sequence[CommandSpec] = (
    CommandSpec(
        name="memorize",
        summary="Type the answer to each question from memory.",
        handler=lambda argv: _run_mode("memorize", argv),
    ),
    CommandSpec(
        name="truefalse",
        summary="Confirm or reject a proposed answer per question.",
        handler=lambda argv: _run_mode("truefalse", argv),
    ),
    CommandSpec(
        name="multichoice",
        summary="Pick the correct answer from lettered choices.",
        handler=lambda argv: _run_mode("multichoice", argv),
    ),
    CommandSpec(
        name="config",
        summary="Write the default askme.toml configuration.",
        handler=lambda argv: _run_module_command(
            "askme.quiz._main", "config_main", argv
        ),
    ),
)

COMMANDS: Mapping[str, CommandSpec] = {
    spec.name: spec for spec in _COMMAND_SPECS
}


def _sorted_specs() -> Iterable[CommandSpec]:
    return sorted(_COMMAND_SPECS, key=lambda spec: spec.name)


def format_command_table() -> str:
    """Return the command listing used by help output."""

    width = max(len(spec.name) for spec in _sorted_specs())
    lines = ["Available commands:"]
    for spec in _sorted_specs():
        lines.append(f"  {spec.name.ljust(width)}  {spec.summary}")
    return "\n".join(lines)


def format_usage() -> str:
    parts = [
        "Usage: askme <command> [args...]",
        "Run `askme list` for commands or `askme help <name>` for details.",
        "",
        format_command_table(),
    ]
    return "\n".join(parts)


def _print(
    text: str, *, stream: Optional[Callable[[str], object]] = None
) -> None:
    target = stream if stream is not None else sys.stdout.write
    if text:
        target(text + "\n")


def _handle_version() -> int:
    try:
        version = metadata.version("askme")
    except metadata.PackageNotFoundError:
        version = "unknown"
    _print(version)
    return 0


def _handle_help(argv: Sequence[str]) -> int:
    if not argv:
        _print(format_usage())
        return 0
    spec = COMMANDS.get(argv[0])
    if not spec:
        _print(f"Unknown command '{argv[0]}'.", stream=sys.stderr.write)
        _print(format_command_table(), stream=sys.stderr.write)
        return 2
    _print(f"{spec.name}: {spec.summary}")
    _print(f"Run `askme {spec.name} --help` for command options.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])

    if not args:
        _print(format_usage())
        return 2

    head, *tail = args
    if head in ("-h", "--help"):
        _print(format_usage())
        return 0
    if head in ("-V", "--version", "version"):
        return _handle_version()
    if head == "list":
        _print(format_command_table())
        return 0
    if head == "help":
        return _handle_help(tail)

    spec = COMMANDS.get(head)
    if spec is None:
        _print(f"Unknown command '{head}'.", stream=sys.stderr.write)
        _print(format_command_table(), stream=sys.stderr.write)
        return 2
    try:
        return spec.handler(tail)
    except SystemExit as exc:
        return _normalize_system_exit(exc)


def _run_mode(name: str, argv: Sequence[str]) -> int:
    from askme.quiz._main import run_mode
    from askme.quiz.models import QuizMode

    return run_mode(
        QuizMode.from_value(name), list(argv), prog=f"askme {name}"
    )


def _run_module_command(
    module_name: str, func_name: str, argv: Sequence[str]
) -> int:
    target = getattr(import_module(module_name), func_name)
    return target(list(argv))


def _normalize_system_exit(exc: SystemExit) -> int:
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    _print(str(code), stream=sys.stderr.write)
    return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
