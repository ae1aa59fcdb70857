"""Board Service — upload, memoized advance and final-state search.

Invariants:
    - Validation runs before any repository call (no partial uploads)
    - next_state returns a memoized edge without recomputing when one exists
    - The edge is stored even when the board maps to itself (still-life self-loop)
    - Each next_state commits its state and edge before returning, so a
      cancelled or failed multi-step call leaves valid memo entries behind
    - No mutable state held between calls; StorageError propagates unretried

Design Decisions:
    - Returns tagged outcomes (core/outcomes.py): callers branch on values
    - states_ahead walks edges one by one, no shortcut across detected cycles
    - final_state reuses next_state so every visited transition is memoized
"""

import logging
from typing import Any

from lifegraph.core.board_identity import compute_board_id
from lifegraph.core.domain_types import (
    MAX_BOARD_SIZE, BoardId, BoardState, FinalStateKind, UnstableReason,
)
from lifegraph.core.evolution import ToroidalEngine
from lifegraph.core.final_state import (
    DEFAULT_MAX_ITERATIONS, ITERATION_LIMIT_MESSAGE, OSCILLATION_MESSAGE,
    Transition, classify_transition,
)
from lifegraph.core.outcomes import (
    AdvanceOutcome, BoardNotFound, BoardUploaded, Evolved, FinalStateOutcome,
    StableBoard, UnstableBoard, UploadOutcome,
)
from lifegraph.core.repository_protocols import BoardRepository, EvolutionEngine
from lifegraph.core.validate_board import validate_board, validate_steps

logger = logging.getLogger(__name__)


class BoardService:
    """Coordinates identity, evolution and the memoized evolution graph."""

    def __init__(
        self,
        repository: BoardRepository,
        engine: EvolutionEngine | None = None,
        max_board_size: int = MAX_BOARD_SIZE,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ):
        self.repository = repository
        self.engine = engine or ToroidalEngine()
        self.max_board_size = max_board_size
        self.max_iterations = max_iterations

    async def upload(self, size: Any, live_cells: Any) -> UploadOutcome:
        """Validate, hash and store a board. Idempotent."""
        invalid = validate_board(size, live_cells, self.max_board_size)
        if invalid:
            logger.warning(f"Rejected board upload: {invalid.message}")
            return invalid

        state = BoardState.of(size, live_cells)
        board_id = compute_board_id(state.size, state.live_cells)

        if await self.repository.exists(board_id):
            logger.debug(
                "Board already exists, skipping storage",
                extra={"board_id": board_id},
            )
            return BoardUploaded(board_id, created=False)

        await self.repository.store_state(board_id, state)
        logger.info(
            f"New board created with size={size} and "
            f"{len(state.live_cells)} live cells",
            extra={"board_id": board_id},
        )
        return BoardUploaded(board_id, created=True)

    async def next_state(self, board_id: BoardId) -> AdvanceOutcome:
        """One generation forward, from the memo when possible."""
        cached_id = await self.repository.get_edge(board_id)
        if cached_id is not None:
            cached_state = await self.repository.get_state(cached_id)
            if cached_state is not None:
                logger.debug(
                    "Found cached evolution",
                    extra={"board_id": board_id, "next_board_id": cached_id},
                )
                return Evolved(cached_id, cached_state, cached=True)

        current = await self.repository.get_state(board_id)
        if current is None:
            logger.warning(
                "Board not found when calculating next state",
                extra={"board_id": board_id},
            )
            return BoardNotFound(board_id)

        next_cells = self.engine.evolve_generation(current.size, current.live_cells)
        next_state = BoardState.of(current.size, next_cells)
        next_id = compute_board_id(next_state.size, next_state.live_cells)

        if not await self.repository.exists(next_id):
            await self.repository.store_state(next_id, next_state)
        await self.repository.store_edge(board_id, next_id)

        logger.info(
            f"Calculated next state with {len(next_cells)} live cells",
            extra={"board_id": board_id, "next_board_id": next_id},
        )
        return Evolved(next_id, next_state, cached=False)

    async def states_ahead(self, board_id: BoardId, steps: Any) -> AdvanceOutcome:
        """Apply next_state `steps` times, threading the id forward."""
        invalid = validate_steps(steps)
        if invalid:
            return invalid

        outcome = await self.next_state(board_id)
        for _ in range(1, steps):
            if not isinstance(outcome, Evolved):
                break
            outcome = await self.next_state(outcome.board_id)
        return outcome

    async def final_state(self, board_id: BoardId) -> FinalStateOutcome:
        """Search for a period-1 fixed point within max_iterations."""
        if not await self.repository.exists(board_id):
            logger.warning(
                "Board not found when finding final state",
                extra={"board_id": board_id},
            )
            return BoardNotFound(board_id)

        seen: set[BoardId] = {board_id}
        current_id = board_id

        for iteration in range(1, self.max_iterations + 1):
            outcome = await self.next_state(current_id)
            if not isinstance(outcome, Evolved):
                return outcome

            match classify_transition(current_id, outcome.board_id, seen):
                case Transition.STILL_LIFE:
                    logger.info(
                        f"Still life detected after {iteration} iterations",
                        extra={"board_id": board_id, "iterations": iteration},
                    )
                    return StableBoard(
                        outcome.board_id, outcome.state,
                        kind=FinalStateKind.STILL_LIFE, period=1,
                        iterations=iteration,
                    )
                case Transition.CYCLE:
                    logger.info(
                        f"Cycle detected after {iteration} iterations",
                        extra={"board_id": board_id, "iterations": iteration},
                    )
                    return UnstableBoard(
                        UnstableReason.OSCILLATION, OSCILLATION_MESSAGE,
                        iterations=iteration,
                    )
                case Transition.CONTINUE:
                    seen.add(outcome.board_id)
                    current_id = outcome.board_id

        logger.warning(
            f"Exceeded {self.max_iterations} iterations without reaching "
            "final state",
            extra={"board_id": board_id, "iterations": self.max_iterations},
        )
        return UnstableBoard(
            UnstableReason.ITERATION_LIMIT, ITERATION_LIMIT_MESSAGE,
            iterations=self.max_iterations,
        )

    async def list_board_ids(self) -> list[BoardId]:
        return await self.repository.list_board_ids()

    async def health_check(self) -> bool:
        return await self.repository.health_check()
