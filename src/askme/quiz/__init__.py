from ._main import build_arg_parser, run_mode
from .config import AskmeConfigError, QuizSettings, load_settings
from .errors import (
    AggregationError,
    AskmeError,
    ContentError,
    EmptyAnswersError,
    EmptySetError,
    QuestionSetError,
)
from .loader import load_question_set, parse_question_set
from .manager.answers import AggregatedAnswers, aggregate_answers, matches
from .models import Question, QuestionSet, QuizMode
from .session import (
    QuestionResponse,
    QuizSession,
    QuizSessionResult,
    QuizSummary,
)
from .utils import shuffled

__all__ = [
    "build_arg_parser",
    "run_mode",
    "AskmeConfigError",
    "QuizSettings",
    "load_settings",
    "AskmeError",
    "QuestionSetError",
    "ContentError",
    "EmptySetError",
    "EmptyAnswersError",
    "AggregationError",
    "load_question_set",
    "parse_question_set",
    "AggregatedAnswers",
    "aggregate_answers",
    "matches",
    "Question",
    "QuestionSet",
    "QuizMode",
    "QuestionResponse",
    "QuizSession",
    "QuizSessionResult",
    "QuizSummary",
    "shuffled",
]
