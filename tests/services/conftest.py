"""Service test fixtures — in-memory repository and instrumented engine.

Invariants:
    - Every test gets a fresh InMemoryBoardRepository
    - The service's engine is a CountingEngine so cache hits are observable
"""

import pytest

from lifegraph.infrastructure.memory_board_repository import InMemoryBoardRepository
from lifegraph.services.board_service import BoardService
from tests.services.fakes import CountingEngine


@pytest.fixture
def repository():
    return InMemoryBoardRepository()


@pytest.fixture
def engine():
    return CountingEngine()


@pytest.fixture
def service(repository, engine):
    return BoardService(repository, engine)
