"""In-Memory Board Repository — BoardRepository on two dicts, for dev and tests.

Invariants:
    - Same contract as SqlBoardRepository: idempotent upserts, one edge per source
    - Always healthy (no external dependency)
    - State lost on restart

Design Decisions:
    - Plain dicts: single event loop, each method runs without awaiting in
      between reads and writes, so every operation is atomic per key
"""

import logging

from lifegraph.core.domain_types import BoardId, BoardState

logger = logging.getLogger(__name__)


class InMemoryBoardRepository:
    """Process-local evolution graph."""

    def __init__(self):
        self._boards: dict[BoardId, BoardState] = {}
        self._edges: dict[BoardId, BoardId] = {}

    async def store_state(self, board_id: BoardId, state: BoardState) -> None:
        self._boards[board_id] = state
        logger.debug(
            f"Stored board with {len(state.live_cells)} live cells. "
            f"Total boards: {len(self._boards)}",
            extra={"board_id": board_id},
        )

    async def get_state(self, board_id: BoardId) -> BoardState | None:
        state = self._boards.get(board_id)
        if state is None:
            logger.debug("Board not found", extra={"board_id": board_id})
        return state

    async def exists(self, board_id: BoardId) -> bool:
        return board_id in self._boards

    async def store_edge(self, from_id: BoardId, to_id: BoardId) -> None:
        self._edges[from_id] = to_id
        logger.debug(
            "Stored evolution relationship",
            extra={"board_id": from_id, "next_board_id": to_id},
        )

    async def get_edge(self, from_id: BoardId) -> BoardId | None:
        return self._edges.get(from_id)

    async def list_board_ids(self) -> list[BoardId]:
        return sorted(self._boards)

    async def count_edges(self) -> int:
        return len(self._edges)

    async def health_check(self) -> bool:
        return True

    async def clear_all(self) -> None:
        self._boards.clear()
        self._edges.clear()
        logger.debug("Cleared all boards and evolution edges")
