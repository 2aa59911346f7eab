# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Fairness scoring
Pure computation, no side effects.

Two strategies, selected by the caller:
    load_balancing    score = -history_count        (fewest assignments wins)
    recency_weighted  score = 2 * days_since_last + 3 * (10 - history_count)

Higher score is more deserving. Candidates are always ordered by id before
selection so ties resolve deterministically.
"""

from datetime import date
from enum import Enum
from typing import Any, Optional

from rota.core.exceptions import ValidationError

NEVER_ASSIGNED_DAYS = 999
RECENCY_WEIGHT = 2
COUNT_WEIGHT = 3
COUNT_BASELINE = 10


class FairnessStrategy(str, Enum):
    LOAD_BALANCING = "load_balancing"
    RECENCY_WEIGHTED = "recency_weighted"

    @classmethod
    def parse(cls, value) -> "FairnessStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower().strip())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(f"strategy must be one of: {allowed}")


def days_since(last_assigned: Optional[date], reference: date) -> int:
    if last_assigned is None:
        return NEVER_ASSIGNED_DAYS
    return (reference - last_assigned).days


def score(
    history_count: int,
    last_assigned: Optional[date],
    reference: date,
    strategy: FairnessStrategy = FairnessStrategy.LOAD_BALANCING,
) -> int:
    """Priority of one member on ``reference``; higher means assign next."""
    if strategy is FairnessStrategy.RECENCY_WEIGHTED:
        return (
            RECENCY_WEIGHT * days_since(last_assigned, reference)
            + COUNT_WEIGHT * (COUNT_BASELINE - history_count)
        )
    return -history_count


def eligible_candidates(
    candidates: list[dict[str, Any]],
    counts: dict[int, int],
    last_assigned: dict[int, date],
    reference: date,
    strategy: FairnessStrategy,
) -> list[dict[str, Any]]:
    """The best-scoring candidates, ordered by id ascending."""
    if not candidates:
        return []
    scored = [
        (
            score(counts.get(m["id"], 0), last_assigned.get(m["id"]), reference, strategy),
            m,
        )
        for m in sorted(candidates, key=lambda m: m["id"])
    ]
    best = max(s for s, _ in scored)
    return [m for s, m in scored if s == best]


def select_candidate(
    candidates: list[dict[str, Any]],
    counts: dict[int, int],
    last_assigned: dict[int, date],
    reference: date,
    strategy: FairnessStrategy = FairnessStrategy.LOAD_BALANCING,
    rotation_index: int = 0,
) -> Optional[dict[str, Any]]:
    """
    Pick one member: round-robin over the best-scoring subset.
    ``rotation_index`` 0 always yields the lowest id among the best.
    """
    eligible = eligible_candidates(candidates, counts, last_assigned, reference, strategy)
    if not eligible:
        return None
    return eligible[rotation_index % len(eligible)]
