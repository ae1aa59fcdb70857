"""Final-State Classification — decides what one step of the search means.

Invariants:
    - classify_transition is PURE: it does not add to `seen`, the caller does
    - next == current is the only success (period-1 still life)
    - Any revisit of an earlier id is an oscillation, whatever its true period
    - DEFAULT_MAX_ITERATIONS (1000) bounds the search

Design Decisions:
    - Split from BoardService so the cycle rules are testable without storage
"""

from enum import Enum
from typing import Collection

from lifegraph.core.domain_types import BoardId

DEFAULT_MAX_ITERATIONS: int = 1000

OSCILLATION_MESSAGE = (
    "Board does not reach a stable conclusion - oscillates in a cycle"
)
ITERATION_LIMIT_MESSAGE = (
    "Board does not reach a stable conclusion within reasonable iterations"
)


class Transition(str, Enum):
    STILL_LIFE = "still_life"
    CYCLE = "cycle"
    CONTINUE = "continue"


def classify_transition(
    current_id: BoardId, next_id: BoardId, seen: Collection[BoardId],
) -> Transition:
    """Classify current -> next against the ids visited so far."""
    if next_id == current_id:
        return Transition.STILL_LIFE
    if next_id in seen:
        return Transition.CYCLE
    return Transition.CONTINUE
