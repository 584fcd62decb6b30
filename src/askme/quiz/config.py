"""Settings loader for the askme drills.

Precedence is CLI > environment (``ASKME_*``) > ``askme.toml`` > defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from askme.core import config as core_config
from askme.core import workspace as workspace_mod

CONFIG_FILENAME = "askme.toml"
CONFIG_ENV = "ASKME_CONFIG"
ENV_PREFIX = "ASKME_"

MAX_CHOICES_LIMIT = 26
_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}
_KIND_NAMES = {int: "an integer", float: "a number"}


class AskmeConfigError(RuntimeError):
    """Raised when settings cannot be read or fail validation."""


@dataclass(frozen=True)
class QuizSettings:
    """Behaviour switches shared by every drill mode."""

    shuffle: bool = False
    loop_questions: bool = False
    case_sensitive: bool = False
    show_correct: bool = False
    wait_duration: float = 1.0
    max_choices: int = 4
    columns: int = 2
    seed: Optional[int] = None


@dataclass(frozen=True)
class SettingsOverrides:
    """CLI-sourced values; ``None`` means "not given"."""

    shuffle: Optional[bool] = None
    loop_questions: Optional[bool] = None
    case_sensitive: Optional[bool] = None
    show_correct: Optional[bool] = None
    wait_duration: Optional[float] = None
    max_choices: Optional[int] = None
    columns: Optional[int] = None
    seed: Optional[int] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    settings: QuizSettings
    log_level: str
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_settings(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[SettingsOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Resolve :class:`QuizSettings` from every configuration source."""

    overrides = overrides or SettingsOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(
            env=env_map, path=workspace_path
        )
    except workspace_mod.WorkspaceError as exc:
        raise AskmeConfigError(str(exc)) from exc

    requested = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=layout.path_for("config") / CONFIG_FILENAME,
    )
    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested.exists():
        loaded_path = requested
        try:
            core_config.merge_defaults(
                table, core_config.load_toml(requested)
            )
        except core_config.TomlConfigError as exc:
            raise AskmeConfigError(str(exc)) from exc
    elif config_path is not None or (env_map.get(CONFIG_ENV) or "").strip():
        raise AskmeConfigError(f"Config file not found: {requested}")

    session = table["session"]
    multichoice = table["multichoice"]
    settings = QuizSettings(
        shuffle=_bool_option(
            "session.shuffle",
            overrides.shuffle,
            _env_bool(env_map, "SHUFFLE"),
            session["shuffle"],
        ),
        loop_questions=_bool_option(
            "session.loop_questions",
            overrides.loop_questions,
            _env_bool(env_map, "LOOP_QUESTIONS"),
            session["loop_questions"],
        ),
        case_sensitive=_bool_option(
            "session.case_sensitive",
            overrides.case_sensitive,
            _env_bool(env_map, "CASE_SENSITIVE"),
            session["case_sensitive"],
        ),
        show_correct=_bool_option(
            "session.show_correct",
            overrides.show_correct,
            _env_bool(env_map, "SHOW_CORRECT"),
            session["show_correct"],
        ),
        wait_duration=_duration(
            _pick_first(
                overrides.wait_duration,
                _env_number(env_map, "WAIT_DURATION", float),
                session["wait_duration"],
            )
        ),
        max_choices=_int_in_range(
            "multichoice.max_choices",
            _pick_first(
                overrides.max_choices,
                _env_number(env_map, "MAX_CHOICES", int),
                multichoice["max_choices"],
            ),
            low=1,
            high=MAX_CHOICES_LIMIT,
        ),
        columns=_int_in_range(
            "multichoice.columns",
            _pick_first(
                overrides.columns,
                _env_number(env_map, "COLUMNS", int),
                multichoice["columns"],
            ),
            low=1,
            high=MAX_CHOICES_LIMIT,
        ),
        seed=_seed(
            _pick_first(
                overrides.seed,
                _env_number(env_map, "SEED", int),
                session["seed"],
            )
        ),
    )
    log_level = _log_level(
        _pick_first(
            overrides.log_level,
            _env_string(env_map, "LOG_LEVEL"),
            table["logging"]["level"],
        )
    )
    return LoadResult(
        settings=settings,
        log_level=log_level,
        layout=layout,
        config_path=loaded_path,
    )


def read_template() -> str:
    """Return the packaged ``askme.toml`` template."""

    return (
        resources.files("askme.quiz")
        .joinpath("template.toml")
        .read_text(encoding="utf-8")
    )


def write_template(path: Path, *, overwrite: bool = False) -> Path:
    try:
        return core_config.write_toml_template(
            path, template=read_template(), overwrite=overwrite
        )
    except core_config.TomlConfigError as exc:
        raise AskmeConfigError(str(exc)) from exc


def default_config_path(workspace_path: Optional[Path] = None) -> Path:
    try:
        layout = workspace_mod.ensure_workspace(path=workspace_path)
    except workspace_mod.WorkspaceError as exc:
        raise AskmeConfigError(str(exc)) from exc
    return layout.path_for("config") / CONFIG_FILENAME


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    # TOML has no null, so an absent seed stays None unless the file sets it.
    defaults = QuizSettings()
    return {
        "session": {
            "shuffle": defaults.shuffle,
            "loop_questions": defaults.loop_questions,
            "case_sensitive": defaults.case_sensitive,
            "show_correct": defaults.show_correct,
            "wait_duration": defaults.wait_duration,
            "seed": defaults.seed,
        },
        "multichoice": {
            "max_choices": defaults.max_choices,
            "columns": defaults.columns,
        },
        "logging": {"level": "INFO"},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = (env_map.get(CONFIG_ENV) or "").strip()
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _bool_option(name: str, *candidates: object) -> bool:
    value = _pick_first(*candidates)
    if not isinstance(value, bool):
        raise AskmeConfigError(f"{name} must be true or false.")
    return value


def _duration(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AskmeConfigError("session.wait_duration must be a number.")
    if value < 0:
        raise AskmeConfigError("session.wait_duration must be >= 0.")
    return float(value)


def _int_in_range(name: str, value: object, *, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise AskmeConfigError(f"{name} must be an integer.")
    if not low <= value <= high:
        raise AskmeConfigError(f"{name} must be between {low} and {high}.")
    return value


def _seed(value: object) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise AskmeConfigError("session.seed must be an integer.")
    return value


def _log_level(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise AskmeConfigError("logging.level must be a non-empty string.")
    return value.strip().upper()


def _env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    return raw.strip() or None


def _env_bool(env_map: Mapping[str, str], key: str) -> Optional[bool]:
    raw = _env_string(env_map, key)
    if raw is None:
        return None
    lowered = raw.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise AskmeConfigError(
        f"{ENV_PREFIX}{key} must be a boolean (true/false), got '{raw}'."
    )


def _env_number(env_map: Mapping[str, str], key: str, kind: type):
    raw = _env_string(env_map, key)
    if raw is None:
        return None
    try:
        return kind(raw)
    except ValueError as exc:
        raise AskmeConfigError(
            f"{ENV_PREFIX}{key} must be {_KIND_NAMES[kind]}, got '{raw}'."
        ) from exc


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
