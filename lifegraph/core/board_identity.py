"""Board Identity — content-addressed identifiers for board states.

Invariants:
    - Same size + same sorted cell multiset => same id, whatever the input order
    - Different size => different id, even for identical coordinates
    - Duplicated cells are NOT collapsed before hashing
    - Ids are 64-character uppercase SHA-256 hex digests

Design Decisions:
    - Compact JSON with a fixed key order ("Size", then "LiveCells") is the
      canonical byte form; ids stay compatible with boards stored by earlier
      deployments of the service
"""

import hashlib
import json
from typing import Iterable

from lifegraph.core.domain_types import BoardId, BoardState, Cell


def canonical_cells(live_cells: Iterable[Cell]) -> list[list[int]]:
    """Cells sorted by x then y, duplicates kept."""
    return [[x, y] for x, y in sorted((int(x), int(y)) for x, y in live_cells)]


def canonical_bytes(size: int, live_cells: Iterable[Cell]) -> bytes:
    """Serialized (size, sorted cells) with fixed field order."""
    payload = {"Size": size, "LiveCells": canonical_cells(live_cells)}
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


def compute_board_id(size: int, live_cells: Iterable[Cell]) -> BoardId:
    """Deterministic id for a board. Pure, no IO."""
    digest = hashlib.sha256(canonical_bytes(size, live_cells)).hexdigest()
    return BoardId(digest.upper())


def board_id_of(state: BoardState) -> BoardId:
    return compute_board_id(state.size, state.live_cells)
