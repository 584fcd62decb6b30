import logging
import random

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..errors import AggregationError
from ..models import Question

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregatedAnswers:
    """Candidate answers for one presentation of a question.

    ``choices[correct_index]`` is the only entry accepted by the question.
    """

    choices: Tuple[str, ...]
    correct_index: int
    requested_size: int

    @property
    def size(self) -> int:
        return len(self.choices)

    @property
    def clamped(self) -> bool:
        return self.size < self.requested_size

    @property
    def correct_answer(self) -> str:
        return self.choices[self.correct_index]


def matches(
    submitted: str, accepted: Iterable[str], case_sensitive: bool = False
) -> bool:
    """Return True when ``submitted`` equals one of the ``accepted`` answers.

    Surrounding whitespace of the submission is ignored. Without
    ``case_sensitive`` both sides are lower-cased first.
    """
    answer = submitted.strip()
    if case_sensitive:
        return answer in set(accepted)
    return answer.lower() in {a.lower() for a in accepted}


def aggregate_answers(
    target: Question,
    pool: Sequence[Question],
    size: int,
    *,
    rng: Optional[random.Random] = None,
) -> AggregatedAnswers:
    """Pick ``size`` candidate answers for ``target`` from ``pool``.

    One answer of ``target`` is placed at a random position; the other slots
    hold distractors sampled from the pool that differ from each other and
    from every answer of ``target``. When the pool cannot supply enough
    distinct answers the size shrinks and a warning is logged.
    """
    if size < 1:
        raise ValueError("size must be >= 1")
    if not target.answers:
        raise AggregationError(f"Question '{target.title}' has no answers.")
    if not pool:
        raise AggregationError("Cannot build choices from an empty pool.")
    pairs_total = sum(len(q.answers) for q in pool)
    if pairs_total == 0:
        raise AggregationError("No question in the pool has any answers.")

    rng = rng or random.Random()
    accepted = set(target.answers)
    effective = _effective_size(accepted, pool, size)
    if effective < size:
        logger.warning(
            "Not enough distinct answers; reducing choice count",
            extra={
                "question": target.title,
                "requested": size,
                "effective": effective,
            },
        )

    correct = target.answers[rng.randrange(len(target.answers))]
    distractors = _sample_distractors(
        pool, accepted, effective - 1, pairs_total, rng
    )
    correct_index = rng.randrange(effective)
    distractors.insert(correct_index, correct)
    return AggregatedAnswers(
        choices=tuple(distractors),
        correct_index=correct_index,
        requested_size=size,
    )


def _effective_size(
    accepted: Set[str], pool: Sequence[Question], size: int
) -> int:
    distinct = {answer for q in pool for answer in q.answers}
    usable = len(distinct - accepted) + 1
    return min(size, len(distinct), usable)


def _sample_distractors(
    pool: Sequence[Question],
    accepted: Set[str],
    count: int,
    pairs_total: int,
    rng: random.Random,
) -> List[str]:
    # Each (question, answer) pair is looked at once; running out of unseen
    # pairs means the pool cannot supply ``count`` distractors.
    answered = [idx for idx, q in enumerate(pool) if q.answers]
    seen: Set[Tuple[int, int]] = set()
    chosen: List[str] = []
    taken: Set[str] = set()
    while len(chosen) < count:
        if len(seen) >= pairs_total:
            raise AggregationError(
                "Ran out of distinct answers after {0} of {1} distractors.".format(
                    len(chosen), count
                )
            )
        q_idx = answered[rng.randrange(len(answered))]
        a_idx = rng.randrange(len(pool[q_idx].answers))
        if (q_idx, a_idx) in seen:
            continue
        seen.add((q_idx, a_idx))
        text = pool[q_idx].answers[a_idx]
        if text in accepted or text in taken:
            continue
        taken.add(text)
        chosen.append(text)
    return chosen
