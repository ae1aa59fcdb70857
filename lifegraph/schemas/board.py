"""Board Schemas — Pydantic models for the board API boundary.

Invariants:
    - JSON keys are camelCase (boardId, liveCells, finalStateType)
    - BoardCreate only checks JSON shape; size is a strict integer and cells
      reach core/validate_board.py uncoerced, so booleans and numeric strings
      are reported as malformed cells

Design Decisions:
    - alias_generator=to_camel + populate_by_name: Python code uses snake_case,
      clients keep the camelCase wire format
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictInt
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BoardCreate(CamelModel):
    """Board upload — size plus live cells as [x, y] pairs."""
    size: StrictInt
    live_cells: list[Any]


class BoardResponse(CamelModel):
    board_id: str


class BoardStateResponse(CamelModel):
    board_id: str
    live_cells: list[list[int]]


class FinalStateResponse(CamelModel):
    board_id: str
    live_cells: list[list[int]]
    final_state_type: str
    period: int


class BoardListResponse(CamelModel):
    board_ids: list[str]


class EngineResponse(CamelModel):
    engine_type: str
