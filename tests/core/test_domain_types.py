"""Domain Types — verifies board state construction and enum values.

Tests:
    - BoardState.of normalizes any pair iterable into a tuple of tuples
    - BoardState is immutable and hashable
    - Enums serialize to their string values
"""

import dataclasses

import pytest

from lifegraph.core.domain_types import (
    MAX_BOARD_SIZE, MIN_BOARD_SIZE, BoardId, BoardState, FinalStateKind,
    StorageBackend, UnstableReason,
)


def test_board_state_of_normalizes_lists():
    state = BoardState.of(10, [[1, 2], [3, 4]])
    assert state.live_cells == ((1, 2), (3, 4))


def test_board_state_round_trips_to_lists():
    state = BoardState.of(10, [(2, 2), (1, 1)])
    assert state.cells_as_lists() == [[2, 2], [1, 1]]


def test_board_state_is_frozen():
    state = BoardState.of(10, [])
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.size = 20


def test_population_ignores_duplicates():
    assert BoardState.of(10, [(1, 1), (1, 1), (2, 2)]).population == 2


def test_equal_states_compare_equal():
    assert BoardState.of(5, [[0, 0]]) == BoardState.of(5, [(0, 0)])
    assert hash(BoardState.of(5, [[0, 0]])) == hash(BoardState.of(5, [(0, 0)]))


def test_board_id_wraps_str():
    assert BoardId("ABC") == "ABC"


def test_size_bounds():
    assert (MIN_BOARD_SIZE, MAX_BOARD_SIZE) == (1, 1000)


def test_enums_serialize_to_string():
    assert FinalStateKind.STILL_LIFE.value == "still_life"
    assert UnstableReason.OSCILLATION.value == "oscillation"
    assert UnstableReason.ITERATION_LIMIT.value == "iteration_limit"
    assert StorageBackend("memory") is StorageBackend.MEMORY
