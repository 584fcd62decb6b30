import argparse
import random
import sys
import time
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.console import Console

from ..core.logging import configure_logger, disable_console_handler
from .config import (
    MAX_CHOICES_LIMIT,
    AskmeConfigError,
    SettingsOverrides,
    default_config_path,
    load_settings,
    write_template,
)
from .errors import AskmeError
from .loader import load_question_set
from .models import QuizMode
from .session import QuizSession
from .view.console import InputProvider, render_error

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

_DESCRIPTIONS = {
    QuizMode.MEMORIZE: "Recall answers to the questions of an askme file.",
    QuizMode.TRUEFALSE: "Confirm or reject proposed answers (y/n).",
    QuizMode.MULTICHOICE: "Pick the correct answer from lettered choices.",
}


def build_arg_parser(
    mode: QuizMode, prog: Optional[str] = None
) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=prog or f"askme-{mode.value}",
        description=_DESCRIPTIONS[mode],
        epilog="Run `askme config init` to write a default askme.toml.",
    )
    p.add_argument("filename", type=Path, help="askme YAML file")
    p.add_argument(
        "-d",
        "--duration",
        dest="wait_duration",
        type=float,
        help="Delay between questions in seconds, can be decimal "
        "(default: 1.0)",
    )
    p.add_argument(
        "-L",
        "--loop-questions",
        action="store_true",
        default=None,
        help="Quiz in a loop until interrupted",
    )
    p.add_argument(
        "-s",
        "--shuffle",
        action="store_true",
        default=None,
        help="Ask the questions in a random order",
    )
    p.add_argument(
        "-C",
        "--case-sensitive",
        action="store_true",
        default=None,
        help="Make typed answers case-sensitive",
    )
    p.add_argument(
        "-S",
        "--show-correct",
        action="store_true",
        default=None,
        help="Show the correct answer(s) if an answer was wrong",
    )
    if mode is QuizMode.MULTICHOICE:
        p.add_argument(
            "-n",
            "--max-choices",
            type=int,
            help=f"Choices per question, 1-{MAX_CHOICES_LIMIT} (default: 4)",
        )
        p.add_argument(
            "--columns",
            type=int,
            help="Columns for the choice listing (default: 2)",
        )
    p.add_argument("--seed", type=int, help="Seed for a repeatable run")
    p.add_argument("--config", type=Path, help="Path to an askme.toml file")
    p.add_argument(
        "--workspace",
        type=Path,
        help="Override the askme data directory (config and logs)",
    )
    p.add_argument("--log-level", help="Log file level (default: INFO)")
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Also write log records to stderr",
    )
    return p


def _overrides_from_args(args: argparse.Namespace) -> SettingsOverrides:
    return SettingsOverrides(
        shuffle=args.shuffle,
        loop_questions=args.loop_questions,
        case_sensitive=args.case_sensitive,
        show_correct=args.show_correct,
        wait_duration=args.wait_duration,
        max_choices=getattr(args, "max_choices", None),
        columns=getattr(args, "columns", None),
        seed=args.seed,
        log_level=args.log_level,
    )


def run_mode(
    mode: QuizMode,
    argv: Optional[Sequence[str]] = None,
    *,
    prog: Optional[str] = None,
    console: Optional[Console] = None,
    error_console: Optional[Console] = None,
    input_provider: Optional[InputProvider] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Parse ``argv`` and run one drill, returning the process exit code."""
    parser = build_arg_parser(mode, prog=prog)
    args = parser.parse_args(argv)

    try:
        loaded = load_settings(
            config_path=args.config,
            overrides=_overrides_from_args(args),
            workspace_path=args.workspace,
        )
    except AskmeConfigError as exc:
        parser.error(str(exc))

    logger, _ = configure_logger(
        "askme",
        log_dir=loaded.layout.path_for("logs"),
        level=loaded.log_level,
        verbose=bool(args.verbose),
    )
    logger.debug(
        "askme CLI invoked",
        extra={"mode": mode.value, "question_file": str(args.filename)},
    )

    console = console or Console()
    error_console = error_console or Console(stderr=True)
    settings = loaded.settings
    try:
        question_set = load_question_set(args.filename)
        session = QuizSession(
            question_set,
            settings,
            mode=mode,
            console=console,
            input_provider=input_provider,
            rng=random.Random(settings.seed),
            sleep=sleep,
        )
        session.run()
    except (KeyboardInterrupt, EOFError):
        # Nothing may reach the terminal after an interrupt.
        disable_console_handler(logger)
        logger.info("Quiz session interrupted", extra={"mode": mode.value})
        return EXIT_INTERRUPTED
    except AskmeError as exc:
        logger.error(
            "Quiz run failed",
            extra={"mode": mode.value, "error": str(exc)},
        )
        render_error(error_console, str(exc))
        return EXIT_FAILURE
    return EXIT_OK


def main_memorize(argv: Optional[Sequence[str]] = None) -> int:
    return run_mode(QuizMode.MEMORIZE, argv)


def main_truefalse(argv: Optional[Sequence[str]] = None) -> int:
    return run_mode(QuizMode.TRUEFALSE, argv)


def main_multichoice(argv: Optional[Sequence[str]] = None) -> int:
    return run_mode(QuizMode.MULTICHOICE, argv)


def build_config_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="askme config",
        description="Manage the askme.toml configuration file.",
    )
    sub = p.add_subparsers(dest="command", required=True)
    sp_init = sub.add_parser("init", help="Write the default askme.toml")
    sp_init.add_argument(
        "--path",
        type=Path,
        help="Destination (defaults to the workspace config directory)",
    )
    sp_init.add_argument(
        "--workspace", type=Path, help="Override the askme data directory"
    )
    sp_init.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file",
    )
    return p


def config_main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_config_parser().parse_args(argv)
    try:
        target = args.path or default_config_path(args.workspace)
        written = write_template(target, overwrite=args.force)
    except AskmeConfigError as exc:
        sys.stderr.write(f"{exc}\n")
        return EXIT_FAILURE
    sys.stdout.write(f"Wrote askme config to {written}\n")
    return EXIT_OK
