"""Operation Outcomes — tagged results returned by BoardService.

Invariants:
    - Every service operation returns exactly one of these values
    - "Not found", "invalid input" and "unstable board" are values, not raises
    - Only storage failures travel as exceptions (StorageError)

Design Decisions:
    - Frozen dataclasses: callers branch with `match` / isinstance, no
      exceptional control flow between service and route
    - UnstableBoard is a domain outcome, not a fault: the search finished,
      the board simply has no period-1 conclusion
"""

from dataclasses import dataclass

from lifegraph.core.domain_types import (
    BoardId, BoardState, FinalStateKind, UnstableReason,
)


@dataclass(frozen=True)
class BoardUploaded:
    board_id: BoardId
    created: bool


@dataclass(frozen=True)
class Evolved:
    """One (or N) generations forward: the resulting id and state."""
    board_id: BoardId
    state: BoardState
    cached: bool = False


@dataclass(frozen=True)
class StableBoard:
    board_id: BoardId
    state: BoardState
    kind: FinalStateKind = FinalStateKind.STILL_LIFE
    period: int = 1
    iterations: int = 0


@dataclass(frozen=True)
class UnstableBoard:
    reason: UnstableReason
    message: str
    iterations: int = 0


@dataclass(frozen=True)
class BoardNotFound:
    board_id: str


@dataclass(frozen=True)
class InvalidBoard:
    """Input rejected before any storage mutation."""
    message: str
    field: str
    offending_cells: tuple[tuple, ...] = ()


UploadOutcome = BoardUploaded | InvalidBoard
AdvanceOutcome = Evolved | BoardNotFound | InvalidBoard
FinalStateOutcome = StableBoard | UnstableBoard | BoardNotFound
