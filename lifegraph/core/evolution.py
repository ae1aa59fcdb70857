"""Evolution Step — one Conway generation on a toroidal board, sparse frontier.

Invariants:
    - evolve is PURE: same (size, live_cells) always yields the same cell set
    - Work is proportional to live cells and their neighbourhoods, never size²
    - count_live_neighbors never reports more than NEIGHBOR_CAP
    - Wrapping uses (coord + offset + size) % size, so size == 1 needs no
      special case (every neighbour collapses onto (0, 0))

Design Decisions:
    - Sets of tuples over numpy grids: boards up to 1000x1000 are mostly empty
    - Counting stops at 4 because B3/S23 never distinguishes 4 from 5..8
    - ToroidalEngine wraps evolve behind the EvolutionEngine protocol so the
      service can be handed an instrumented or alternative engine
"""

from typing import Iterable

from lifegraph.core.domain_types import Cell

NEIGHBOR_CAP: int = 4

_OFFSETS: tuple[Cell, ...] = tuple(
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if not (dx == 0 and dy == 0)
)


def wrap(coord: int, offset: int, size: int) -> int:
    """Toroidal coordinate shift."""
    return (coord + offset + size) % size


def neighbors(cell: Cell, size: int) -> list[Cell]:
    """The 8 toroidal neighbours of a cell (may repeat on tiny boards)."""
    x, y = cell
    return [(wrap(x, dx, size), wrap(y, dy, size)) for dx, dy in _OFFSETS]


def build_frontier(live: set[Cell], size: int) -> set[Cell]:
    """Live cells plus every neighbour of a live cell."""
    frontier: set[Cell] = set(live)
    for cell in live:
        frontier.update(neighbors(cell, size))
    return frontier


def count_live_neighbors(live: set[Cell], cell: Cell, size: int) -> int:
    """Live neighbour count, capped at NEIGHBOR_CAP (early exit)."""
    count = 0
    for neighbor in neighbors(cell, size):
        if neighbor in live:
            count += 1
            if count >= NEIGHBOR_CAP:
                return NEIGHBOR_CAP
    return count


def next_cell_state(alive: bool, live_neighbors: int) -> bool:
    """B3/S23: survive on 2 or 3, birth on exactly 3."""
    if alive:
        return live_neighbors in (2, 3)
    return live_neighbors == 3


def evolve(size: int, live_cells: Iterable[Cell]) -> list[Cell]:
    """Compute the next generation. Inputs must already be validated."""
    live = {(x, y) for x, y in live_cells}
    return [
        cell
        for cell in build_frontier(live, size)
        if next_cell_state(cell in live, count_live_neighbors(live, cell, size))
    ]


class ToroidalEngine:
    """Standard toroidal Game of Life; cells wrap around the edges."""

    engine_type = "Toroidal"

    def evolve_generation(
        self, size: int, live_cells: Iterable[Cell],
    ) -> list[Cell]:
        return evolve(size, live_cells)
