"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - BoardId wraps the hex digest string — never pass raw strings in domain logic
    - Cell is an (x, y) pair with 0 <= x, y < size once validated
    - BoardState is immutable: live_cells is a tuple of tuples
    - All valid outcome kinds encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers for identifiers: zero runtime cost
    - str Enums: serialize to JSON without custom encoders
    - live_cells keeps input order and duplicates; canonical order is a
      concern of board_identity, not of the state itself
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, NewType


# ─── Identity Types ──────────────────────────────────────────────

BoardId = NewType("BoardId", str)


# ─── Value Types ─────────────────────────────────────────────────

Cell = tuple[int, int]

MIN_BOARD_SIZE: int = 1
MAX_BOARD_SIZE: int = 1000


@dataclass(frozen=True)
class BoardState:
    """A square toroidal board and the coordinates of its live cells."""
    size: int
    live_cells: tuple[Cell, ...]

    @classmethod
    def of(cls, size: int, live_cells: Iterable[Iterable[int]]) -> "BoardState":
        """Build a state from any iterable of coordinate pairs."""
        return cls(size, tuple((int(x), int(y)) for x, y in live_cells))

    def cells_as_lists(self) -> list[list[int]]:
        """JSON-friendly [[x, y], ...] form, same order as stored."""
        return [[x, y] for x, y in self.live_cells]

    @property
    def population(self) -> int:
        return len(set(self.live_cells))


# ─── Enums ───────────────────────────────────────────────────────

class FinalStateKind(str, Enum):
    """Successful final-state classifications. Only period-1 is recognized."""
    STILL_LIFE = "still_life"


class UnstableReason(str, Enum):
    """Why a final-state search ended without a stable board."""
    OSCILLATION = "oscillation"
    ITERATION_LIMIT = "iteration_limit"


class StorageBackend(str, Enum):
    """Storage implementations selectable via settings."""
    SQL = "sql"
    MEMORY = "memory"
