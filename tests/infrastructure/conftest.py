"""Infrastructure fixtures — SQLite-backed session manager and repositories.

Invariants:
    - Every test gets a fresh SQLite file under tmp_path (aiosqlite driver)
    - The `repository` fixture is parametrized over both backends, so the
      same contract tests run against SQL and in-memory storage
"""

import pytest

from lifegraph.infrastructure.database import DatabaseSessionManager
from lifegraph.infrastructure.memory_board_repository import InMemoryBoardRepository
from lifegraph.infrastructure.sql_board_repository import SqlBoardRepository


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'lifegraph-test.db'}"


@pytest.fixture
async def db_manager(database_url):
    manager = DatabaseSessionManager(database_url)
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture(params=["sql", "memory"])
async def repository(request, db_manager):
    if request.param == "sql":
        return SqlBoardRepository(db_manager)
    return InMemoryBoardRepository()
