"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - store_state / store_edge are idempotent upserts, atomic per key
    - At most one outgoing edge per source id
    - Implementations raise StorageError on backend failure, never driver errors

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      evolve/compute_board_id that the service combines with them stay sync
"""

from typing import Iterable, Protocol

from lifegraph.core.domain_types import BoardId, BoardState, Cell


class BoardRepository(Protocol):
    """Contract for board state and evolution edge persistence."""
    async def store_state(self, board_id: BoardId, state: BoardState) -> None: ...
    async def get_state(self, board_id: BoardId) -> BoardState | None: ...
    async def exists(self, board_id: BoardId) -> bool: ...
    async def store_edge(self, from_id: BoardId, to_id: BoardId) -> None: ...
    async def get_edge(self, from_id: BoardId) -> BoardId | None: ...
    async def list_board_ids(self) -> list[BoardId]:
        """Every stored id, sorted ascending."""
        ...
    async def health_check(self) -> bool: ...
    async def clear_all(self) -> None:
        """Bulk delete of every state and edge. Test environments only."""
        ...


class EvolutionEngine(Protocol):
    """Contract for a one-generation transition function."""
    engine_type: str

    def evolve_generation(
        self, size: int, live_cells: Iterable[Cell],
    ) -> list[Cell]: ...
