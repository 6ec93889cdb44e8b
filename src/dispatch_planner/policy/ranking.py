# dispatch_planner/policy/ranking.py
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from dispatch_planner.domain.errors import UnknownCandidateError

T = TypeVar("T")

TieBreak = Literal["identifier", "input_order"]


@dataclass(frozen=True)
class Ranked(Generic[T]):
    candidate: T
    score: float
    rank: int  # 1-based
    recommended: bool = False

    @property
    def id(self) -> str:
        return str(self.candidate.id)


def rank_candidates(
    candidates: Iterable[T],
    score_fn: Callable[[T], float],
    *,
    tie_break: TieBreak = "identifier",
) -> list[Ranked[T]]:
    """
    Score every candidate and sort best-first.

    Equal scores are ordered by candidate id ("identifier") or by position in the
    input ("input_order"). NaN scores always sort last. The first entry is the
    recommendation.
    """
    scored = [(idx, c, score_fn(c)) for idx, c in enumerate(candidates)]

    def key(item):
        idx, c, s = item
        nan = math.isnan(s)
        tie = str(c.id) if tie_break == "identifier" else idx
        return (nan, 0.0 if nan else -s, tie, idx)

    scored.sort(key=key)
    return [
        Ranked(candidate=c, score=s, rank=pos + 1, recommended=pos == 0)
        for pos, (_, c, s) in enumerate(scored)
    ]


def recommended(ranked: list[Ranked[T]]) -> Ranked[T] | None:
    return ranked[0] if ranked else None


def select(ranked: list[Ranked[T]], candidate_id: str | None = None) -> Ranked[T]:
    """Return the override when given, else the recommendation."""
    if candidate_id is None:
        top = recommended(ranked)
        if top is None:
            raise UnknownCandidateError("<recommended>")
        return top
    for entry in ranked:
        if entry.id == str(candidate_id):
            return entry
    raise UnknownCandidateError(str(candidate_id))
