"""SQL Board Repository — BoardRepository on SQLAlchemy async (PostgreSQL / SQLite).

Invariants:
    - store_state and store_edge are single-statement upserts
      (INSERT ... ON CONFLICT DO UPDATE): atomic per key, safe to race
    - Every call runs in its own session and commits before returning
    - SQLAlchemy exceptions surface as StorageError (via DatabaseSessionManager)

Design Decisions:
    - Dialect-specific insert construct chosen from the engine's dialect name;
      both PostgreSQL and SQLite support ON CONFLICT upserts
    - Live cells stored as [[x, y], ...] JSON, same order as the BoardState
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite

from lifegraph.core.domain_types import BoardId, BoardState
from lifegraph.core.errors import StorageError
from lifegraph.infrastructure.database import DatabaseSessionManager
from lifegraph.models.board import Board
from lifegraph.models.evolution_edge import EvolutionEdge

logger = logging.getLogger(__name__)

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlBoardRepository:
    """Boards as rows, evolution edges as a keyed edge table."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager
        try:
            self._insert = _INSERTS[manager.dialect_name]
        except KeyError:
            raise StorageError(
                f"unsupported dialect '{manager.dialect_name}'", "configure",
            )

    async def store_state(self, board_id: BoardId, state: BoardState) -> None:
        stmt = self._insert(Board).values(
            id=board_id, size=state.size, live_cells=state.cells_as_lists(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Board.id],
            set_={
                "size": stmt.excluded.size,
                "live_cells": stmt.excluded.live_cells,
                "updated_at": datetime.now(timezone.utc),
            },
        )
        async with self._manager.session() as db:
            await db.execute(stmt)
            await db.commit()
        logger.debug(
            f"Stored board with {len(state.live_cells)} live cells",
            extra={"board_id": board_id},
        )

    async def get_state(self, board_id: BoardId) -> BoardState | None:
        async with self._manager.session() as db:
            result = await db.execute(select(Board).where(Board.id == board_id))
            board = result.scalar_one_or_none()
        if board is None:
            logger.debug("Board not found", extra={"board_id": board_id})
            return None
        return BoardState.of(board.size, board.live_cells)

    async def exists(self, board_id: BoardId) -> bool:
        async with self._manager.session() as db:
            result = await db.execute(
                select(func.count()).select_from(Board).where(Board.id == board_id),
            )
            return result.scalar_one() > 0

    async def store_edge(self, from_id: BoardId, to_id: BoardId) -> None:
        stmt = self._insert(EvolutionEdge).values(
            from_board_id=from_id, to_board_id=to_id,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[EvolutionEdge.from_board_id],
            set_={"to_board_id": stmt.excluded.to_board_id},
        )
        async with self._manager.session() as db:
            await db.execute(stmt)
            await db.commit()
        logger.debug(
            "Stored evolution relationship",
            extra={"board_id": from_id, "next_board_id": to_id},
        )

    async def get_edge(self, from_id: BoardId) -> BoardId | None:
        async with self._manager.session() as db:
            result = await db.execute(
                select(EvolutionEdge.to_board_id)
                .where(EvolutionEdge.from_board_id == from_id),
            )
            to_id = result.scalar_one_or_none()
        return BoardId(to_id) if to_id is not None else None

    async def list_board_ids(self) -> list[BoardId]:
        async with self._manager.session() as db:
            result = await db.execute(
                select(Board.id).order_by(Board.id),
            )
            return [BoardId(board_id) for board_id in result.scalars().all()]

    async def count_edges(self) -> int:
        async with self._manager.session() as db:
            result = await db.execute(
                select(func.count()).select_from(EvolutionEdge),
            )
            return result.scalar_one()

    async def health_check(self) -> bool:
        return await self._manager.health_check()

    async def clear_all(self) -> None:
        async with self._manager.session() as db:
            await db.execute(delete(EvolutionEdge))
            await db.execute(delete(Board))
            await db.commit()
        logger.debug("Cleared all boards and evolution edges")

