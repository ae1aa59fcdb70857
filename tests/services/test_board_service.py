"""Board Service — upload, memoized advance, N-ahead and final-state search.

Tests cover:
    - idempotent, content-addressed upload; validation before any write
    - next_state cache hits (no second evolve), self-loop edges
    - states_ahead consistency with repeated next_state
    - final_state: still life, oscillation, iteration budget, not found
    - storage failures and cancellation keep earlier memo entries
"""

import asyncio

import pytest

from lifegraph.core.board_identity import compute_board_id
from lifegraph.core.domain_types import BoardId, FinalStateKind, UnstableReason
from lifegraph.core.errors import StorageError
from lifegraph.core.final_state import ITERATION_LIMIT_MESSAGE, OSCILLATION_MESSAGE
from lifegraph.core.outcomes import (
    BoardNotFound, BoardUploaded, Evolved, InvalidBoard, StableBoard, UnstableBoard,
)
from lifegraph.services.board_service import BoardService
from tests.patterns import (
    BLINKER_HORIZONTAL, BLINKER_VERTICAL, BLOCK, GLIDER, as_lists,
)
from tests.services.fakes import CountingEngine, FlakyRepository

UNKNOWN_ID = BoardId("0" * 64)


async def _upload(service, size, cells) -> BoardId:
    outcome = await service.upload(size, as_lists(cells))
    assert isinstance(outcome, BoardUploaded)
    return outcome.board_id


# ─── upload ──────────────────────────────────────────────────────

async def test_upload_returns_content_hash(service, repository):
    board_id = await _upload(service, 10, BLOCK)
    assert board_id == compute_board_id(10, BLOCK)
    assert await repository.exists(board_id)


async def test_upload_is_idempotent(service, repository):
    first = await service.upload(10, as_lists(BLOCK))
    second = await service.upload(10, as_lists(reversed(BLOCK)))
    assert first.board_id == second.board_id
    assert first.created is True
    assert second.created is False
    assert len(await repository.list_board_ids()) == 1


async def test_upload_keeps_input_order(service, repository):
    board_id = await _upload(service, 10, [(2, 2), (1, 1)])
    state = await repository.get_state(board_id)
    assert state.live_cells == ((2, 2), (1, 1))


async def test_upload_accepts_empty_board(service):
    board_id = await _upload(service, 10, [])
    assert board_id == compute_board_id(10, [])


async def test_upload_rejects_large_size_before_write(service, repository):
    outcome = await service.upload(2000, [[1, 1]])
    assert isinstance(outcome, InvalidBoard)
    assert outcome.field == "size"
    assert await repository.list_board_ids() == []


async def test_upload_rejects_out_of_bounds_before_write(service, repository):
    outcome = await service.upload(10, [[1, 1], [15, 15]])
    assert isinstance(outcome, InvalidBoard)
    assert outcome.offending_cells == ((15, 15),)
    assert await repository.list_board_ids() == []


async def test_upload_respects_configured_max_size(repository):
    service = BoardService(repository, max_board_size=50)
    outcome = await service.upload(100, [])
    assert isinstance(outcome, InvalidBoard)


async def test_different_sizes_are_independent(service):
    small = await _upload(service, 10, BLOCK)
    large = await _upload(service, 20, BLOCK)
    assert small != large


# ─── next_state ──────────────────────────────────────────────────

async def test_next_state_of_single_cell_is_empty(service):
    board_id = await _upload(service, 10, [(1, 1)])
    outcome = await service.next_state(board_id)
    assert isinstance(outcome, Evolved)
    assert outcome.state.live_cells == ()
    assert outcome.board_id == compute_board_id(10, [])


async def test_next_state_blinker(service):
    board_id = await _upload(service, 10, BLINKER_VERTICAL)
    outcome = await service.next_state(board_id)
    assert set(outcome.state.live_cells) == set(BLINKER_HORIZONTAL)
    assert outcome.board_id != board_id


async def test_next_state_stores_state_and_edge(service, repository):
    board_id = await _upload(service, 10, BLINKER_VERTICAL)
    outcome = await service.next_state(board_id)
    assert await repository.get_edge(board_id) == outcome.board_id
    assert await repository.exists(outcome.board_id)


async def test_next_state_cache_hit_skips_evolution(service, engine, repository):
    board_id = await _upload(service, 10, GLIDER)
    first = await service.next_state(board_id)
    second = await service.next_state(board_id)
    assert engine.calls == 1
    assert first.cached is False
    assert second.cached is True
    assert (first.board_id, first.state) == (second.board_id, second.state)
    assert await repository.count_edges() == 1


async def test_still_life_stores_self_loop(service, engine, repository):
    board_id = await _upload(service, 10, BLOCK)
    outcome = await service.next_state(board_id)
    assert outcome.board_id == board_id
    assert await repository.get_edge(board_id) == board_id
    await service.next_state(board_id)
    assert engine.calls == 1


async def test_next_state_unknown_board(service):
    outcome = await service.next_state(UNKNOWN_ID)
    assert outcome == BoardNotFound(UNKNOWN_ID)


async def test_dangling_edge_falls_back_to_computation(service, repository, engine):
    board_id = await _upload(service, 10, BLINKER_VERTICAL)
    await repository.store_edge(board_id, UNKNOWN_ID)
    outcome = await service.next_state(board_id)
    assert isinstance(outcome, Evolved)
    assert set(outcome.state.live_cells) == set(BLINKER_HORIZONTAL)
    assert engine.calls == 1


# ─── states_ahead ────────────────────────────────────────────────

async def test_ahead_one_equals_next(service):
    board_id = await _upload(service, 10, GLIDER)
    ahead = await service.states_ahead(board_id, 1)
    nxt = await service.next_state(board_id)
    assert (ahead.board_id, ahead.state) == (nxt.board_id, nxt.state)


async def test_ahead_k_equals_k_next_calls(service):
    board_id = await _upload(service, 10, GLIDER)
    ahead = await service.states_ahead(board_id, 4)

    current = board_id
    for _ in range(4):
        current = (await service.next_state(current)).board_id
    assert ahead.board_id == current
    assert set(ahead.state.live_cells) == {(x + 1, y + 1) for x, y in GLIDER}


async def test_ahead_two_returns_blinker_to_start(service):
    board_id = await _upload(service, 10, BLINKER_VERTICAL)
    outcome = await service.states_ahead(board_id, 2)
    assert outcome.board_id == board_id


async def test_ahead_reuses_memo(service, engine):
    board_id = await _upload(service, 10, BLINKER_VERTICAL)
    await service.states_ahead(board_id, 10)
    assert engine.calls == 2


async def test_ahead_rejects_non_positive_steps(service, repository):
    board_id = await _upload(service, 10, BLOCK)
    outcome = await service.states_ahead(board_id, 0)
    assert isinstance(outcome, InvalidBoard)
    assert outcome.field == "steps"
    assert await repository.count_edges() == 0


async def test_ahead_unknown_board(service):
    outcome = await service.states_ahead(UNKNOWN_ID, 3)
    assert isinstance(outcome, BoardNotFound)


# ─── final_state ─────────────────────────────────────────────────

async def test_final_state_block_is_still_life(service):
    board_id = await _upload(service, 10, BLOCK)
    outcome = await service.final_state(board_id)
    assert isinstance(outcome, StableBoard)
    assert outcome.board_id == board_id
    assert outcome.kind == FinalStateKind.STILL_LIFE
    assert outcome.period == 1
    assert set(outcome.state.live_cells) == set(BLOCK)


async def test_final_state_single_cell_ends_empty(service):
    board_id = await _upload(service, 10, [(1, 1)])
    outcome = await service.final_state(board_id)
    assert isinstance(outcome, StableBoard)
    assert outcome.board_id == compute_board_id(10, [])
    assert outcome.state.live_cells == ()
    assert outcome.iterations == 2


async def test_final_state_blinker_oscillates(service):
    board_id = await _upload(service, 10, BLINKER_VERTICAL)
    outcome = await service.final_state(board_id)
    assert isinstance(outcome, UnstableBoard)
    assert outcome.reason == UnstableReason.OSCILLATION
    assert outcome.message == OSCILLATION_MESSAGE
    assert outcome.iterations == 2


async def test_final_state_glider_on_small_torus_cycles(service):
    board_id = await _upload(service, 8, GLIDER)
    outcome = await service.final_state(board_id)
    assert isinstance(outcome, UnstableBoard)
    assert outcome.reason == UnstableReason.OSCILLATION


async def test_final_state_exhausts_budget(repository):
    service = BoardService(repository, max_iterations=3)
    board_id = await _upload(service, 20, GLIDER)
    outcome = await service.final_state(board_id)
    assert isinstance(outcome, UnstableBoard)
    assert outcome.reason == UnstableReason.ITERATION_LIMIT
    assert outcome.message == ITERATION_LIMIT_MESSAGE
    assert outcome.iterations == 3


async def test_final_state_unknown_board(service):
    outcome = await service.final_state(UNKNOWN_ID)
    assert isinstance(outcome, BoardNotFound)


async def test_final_state_memoizes_walk(service, engine):
    board_id = await _upload(service, 10, BLINKER_VERTICAL)
    await service.final_state(board_id)
    calls = engine.calls
    await service.final_state(board_id)
    assert engine.calls == calls


async def test_final_state_reuses_steps_committed_before_cancellation(
    repository, engine, monkeypatch,
):
    service = BoardService(repository, engine)
    board_id = await _upload(service, 40, GLIDER)
    fast_get_edge = repository.get_edge
    calls = 0

    async def get_edge_slowing_down(from_id):
        nonlocal calls
        calls += 1
        if calls > 3:
            await asyncio.sleep(1)
        return await fast_get_edge(from_id)

    monkeypatch.setattr(repository, "get_edge", get_edge_slowing_down)
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(service.final_state(board_id), 0.05)

    assert await repository.count_edges() == 3
    assert engine.calls == 3

    monkeypatch.setattr(repository, "get_edge", fast_get_edge)
    outcome = await service.states_ahead(board_id, 3)
    assert isinstance(outcome, Evolved)
    assert outcome.cached
    assert engine.calls == 3


# ─── storage failures ────────────────────────────────────────────

async def test_storage_failure_propagates_and_keeps_memo():
    repository = FlakyRepository(fail_after=2)
    service = BoardService(repository, CountingEngine())
    board_id = await _upload(service, 20, GLIDER)

    with pytest.raises(StorageError):
        await service.states_ahead(board_id, 5)

    assert await repository.count_edges() == 2
    first = await repository.get_edge(board_id)
    assert first is not None
    assert await repository.get_edge(first) is not None


async def test_health_check_delegates(service):
    assert await service.health_check() is True
