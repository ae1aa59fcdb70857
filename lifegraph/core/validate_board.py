"""Board Validation — domain rules checked before any storage mutation.

Invariants:
    - Every validator is PURE: returns InvalidBoard or None, never raises
    - Validation is exhaustive: all offending cells are reported, not just the first
    - Size bounds are MIN_BOARD_SIZE..max_size inclusive (1..1000 by default)
    - A cell is exactly two integers with 0 <= x, y < size

Design Decisions:
    - Returns an outcome value instead of raising, the shell decides how to
      surface it (HTTP 400 at the API, InvalidBoard from the service)
    - bool is rejected as a coordinate even though it subclasses int
"""

from typing import Any, Sequence

from lifegraph.core.domain_types import MAX_BOARD_SIZE, MIN_BOARD_SIZE
from lifegraph.core.outcomes import InvalidBoard

# Cap on offending cells echoed back in a message
MAX_REPORTED_CELLS: int = 10


def _is_coordinate(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_well_formed(cell: Any) -> bool:
    return (
        isinstance(cell, (list, tuple))
        and len(cell) == 2
        and all(_is_coordinate(v) for v in cell)
    )


def validate_size(size: Any, max_size: int = MAX_BOARD_SIZE) -> InvalidBoard | None:
    """Board size must be an integer between 1 and max_size."""
    if not _is_coordinate(size) or not MIN_BOARD_SIZE <= size <= max_size:
        return InvalidBoard(
            message=f"Board size must be between {MIN_BOARD_SIZE} and {max_size}",
            field="size",
        )
    return None


def find_malformed_cells(live_cells: Sequence[Any]) -> list[Any]:
    return [cell for cell in live_cells if not _is_well_formed(cell)]


def find_out_of_bounds_cells(
    live_cells: Sequence[Sequence[int]], size: int,
) -> list[tuple[int, int]]:
    return [
        (x, y) for x, y in live_cells
        if not (0 <= x < size and 0 <= y < size)
    ]


def _describe(cells: list) -> str:
    shown = ", ".join(f"({c[0]}, {c[1]})" if _is_well_formed(c) else repr(c)
                      for c in cells[:MAX_REPORTED_CELLS])
    hidden = len(cells) - MAX_REPORTED_CELLS
    return shown + (f" and {hidden} more" if hidden > 0 else "")


def validate_board(
    size: Any, live_cells: Any, max_size: int = MAX_BOARD_SIZE,
) -> InvalidBoard | None:
    """Full upload check: size, cell shape, then cell bounds."""
    size_error = validate_size(size, max_size)
    if size_error:
        return size_error

    if live_cells is None or not isinstance(live_cells, (list, tuple)):
        return InvalidBoard(
            message="Live cells array is required", field="live_cells",
        )

    malformed = find_malformed_cells(live_cells)
    if malformed:
        return InvalidBoard(
            message=(
                "Each live cell must be a pair of integer coordinates: "
                f"{_describe(malformed)}"
            ),
            field="live_cells",
            offending_cells=tuple(tuple(c) if isinstance(c, (list, tuple)) else (c,)
                                  for c in malformed),
        )

    out_of_bounds = find_out_of_bounds_cells(live_cells, size)
    if out_of_bounds:
        return InvalidBoard(
            message=(
                f"Live cell coordinates {_describe(out_of_bounds)} are outside "
                f"board bounds (0-{size - 1})"
            ),
            field="live_cells",
            offending_cells=tuple(out_of_bounds),
        )
    return None


def validate_steps(steps: Any) -> InvalidBoard | None:
    """Steps ahead must be a positive integer."""
    if not _is_coordinate(steps) or steps < 1:
        return InvalidBoard(message="Steps must be greater than 0", field="steps")
    return None
