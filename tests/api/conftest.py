"""API test fixtures — FastAPI client over an in-memory repository.

Invariants:
    - Every test gets a fresh InMemoryBoardRepository behind the app
    - Lifespan is not run by ASGITransport; storage is injected directly
"""

import pytest
from httpx import ASGITransport, AsyncClient

from lifegraph.infrastructure import storage
from lifegraph.infrastructure.memory_board_repository import InMemoryBoardRepository
from lifegraph.main import app


@pytest.fixture
def repository():
    return InMemoryBoardRepository()


@pytest.fixture
async def client(repository):
    """FastAPI test client with storage swapped for a fresh repository."""
    previous = storage.board_repository
    storage.set_board_repository(repository)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    storage.set_board_repository(previous)
