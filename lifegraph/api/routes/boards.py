"""Board Routes — upload, next, N-ahead and final-state endpoints.

Invariants:
    - Routes hold no game logic: BoardService decides, routes translate outcomes
    - InvalidBoard → 400, BoardNotFound → 404, UnstableBoard → 422,
      final-state timeout → 504 (all via LifeGraphError + global handler)
    - Final-state search is bounded by settings.final_state_timeout_seconds;
      memo entries committed before the timeout stay valid

Design Decisions:
    - Outcomes matched with `match`, errors raised only at this boundary
    - get_board_service is a FastAPI dependency so tests can override storage
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from lifegraph.config import Settings, get_settings
from lifegraph.core.errors import (
    BoardNotFoundError, BoardValidationError, ErrorContext,
    FinalStateTimeoutError, StabilityError,
)
from lifegraph.core.evolution import ToroidalEngine
from lifegraph.core.outcomes import (
    AdvanceOutcome, BoardNotFound, BoardUploaded, Evolved, InvalidBoard,
    StableBoard, UnstableBoard,
)
from lifegraph.core.repository_protocols import BoardRepository
from lifegraph.infrastructure.storage import get_board_repository
from lifegraph.schemas.board import (
    BoardCreate, BoardListResponse, BoardResponse, BoardStateResponse,
    EngineResponse, FinalStateResponse,
)
from lifegraph.services.board_service import BoardService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["boards"])

_engine = ToroidalEngine()


def get_board_service(
    repository: BoardRepository = Depends(get_board_repository),
    settings: Settings = Depends(get_settings),
) -> BoardService:
    return BoardService(
        repository,
        _engine,
        max_board_size=settings.max_board_size,
        max_iterations=settings.final_state_max_iterations,
    )


def _invalid(outcome: InvalidBoard) -> BoardValidationError:
    return BoardValidationError(
        outcome.message, outcome.field, list(outcome.offending_cells),
    )


def _state_response(outcome: AdvanceOutcome) -> BoardStateResponse:
    match outcome:
        case Evolved(board_id=board_id, state=state):
            return BoardStateResponse(
                board_id=board_id, live_cells=state.cells_as_lists(),
            )
        case BoardNotFound(board_id=board_id):
            raise BoardNotFoundError(board_id)
        case InvalidBoard():
            raise _invalid(outcome)


@router.get("/engine", response_model=EngineResponse)
async def get_engine():
    """Report which evolution engine serves requests."""
    return EngineResponse(engine_type=_engine.engine_type)


@router.post("/board", response_model=BoardResponse)
async def upload_board(
    body: BoardCreate, service: BoardService = Depends(get_board_service),
):
    """Store a board and return its content-addressed id."""
    outcome = await service.upload(body.size, body.live_cells)
    match outcome:
        case BoardUploaded(board_id=board_id):
            return BoardResponse(board_id=board_id)
        case InvalidBoard():
            raise _invalid(outcome)


@router.get("/boards", response_model=BoardListResponse)
async def list_boards(service: BoardService = Depends(get_board_service)):
    """All stored board ids."""
    return BoardListResponse(board_ids=await service.list_board_ids())


@router.get("/board/{board_id}/next", response_model=BoardStateResponse)
async def get_next_state(
    board_id: str, service: BoardService = Depends(get_board_service),
):
    return _state_response(await service.next_state(board_id))


@router.get("/board/{board_id}/ahead/{steps}", response_model=BoardStateResponse)
async def get_states_ahead(
    board_id: str, steps: int,
    service: BoardService = Depends(get_board_service),
):
    return _state_response(await service.states_ahead(board_id, steps))


@router.get("/board/{board_id}/final", response_model=FinalStateResponse)
async def get_final_state(
    board_id: str,
    service: BoardService = Depends(get_board_service),
    settings: Settings = Depends(get_settings),
):
    """Follow the evolution graph until a still life, a cycle or the budget."""
    timeout = settings.final_state_timeout_seconds
    try:
        outcome = await asyncio.wait_for(service.final_state(board_id), timeout)
    except asyncio.TimeoutError:
        logger.warning(
            f"Final state search timed out after {timeout}s",
            extra={"board_id": board_id},
        )
        raise FinalStateTimeoutError(timeout, ErrorContext(board_id=board_id))

    match outcome:
        case StableBoard(board_id=final_id, state=state, kind=kind, period=period):
            return FinalStateResponse(
                board_id=final_id, live_cells=state.cells_as_lists(),
                final_state_type=kind.value, period=period,
            )
        case UnstableBoard(reason=reason, message=message, iterations=iterations):
            raise StabilityError(
                message, reason.value,
                ErrorContext(board_id=board_id, iterations=iterations),
            )
        case BoardNotFound():
            raise BoardNotFoundError(board_id)
