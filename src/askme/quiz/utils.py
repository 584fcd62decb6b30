import random
import string
import time

from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

MCQ_LETTERS = string.ascii_lowercase
YES_WORDS = frozenset({"y", "yes", "t", "true"})
NO_WORDS = frozenset({"n", "no", "f", "false"})


def shuffled(
    items: Sequence[T], rng: Optional[random.Random] = None
) -> List[T]:
    """Return a shuffled copy of ``items``; the input is left untouched."""
    out = list(items)
    (rng or random.Random()).shuffle(out)
    return out


def wait_for(
    seconds: float, sleep: Callable[[float], None] = time.sleep
) -> None:
    if seconds > 0:
        sleep(seconds)


def letter_for(index: int) -> str:
    return MCQ_LETTERS[index]


def parse_choice(raw: Optional[str], count: int) -> Optional[int]:
    """Map input such as ``"b"`` or ``"B) London"`` to a choice index.

    Only the first non-blank character counts. Returns ``None`` when it is not
    one of the first ``count`` letters.
    """
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    index = MCQ_LETTERS.find(text[0].lower())
    if index < 0 or index >= count:
        return None
    return index


def parse_yes_no(raw: Optional[str]) -> Optional[bool]:
    if raw is None:
        return None
    word = raw.strip().lower()
    if word in YES_WORDS:
        return True
    if word in NO_WORDS:
        return False
    return None
