"""Storage Wiring — builds the configured BoardRepository once per process.

Invariants:
    - Exactly one repository per process, created in the FastAPI lifespan
    - "sql" backend also initializes the database session manager
    - get_board_repository() fails loudly if called before init_storage()

Design Decisions:
    - Module-level singleton mirrors db_manager in database.py
    - Tests swap the repository with set_board_repository() or dependency overrides
"""

import logging

from lifegraph.config import Settings
from lifegraph.core.domain_types import StorageBackend
from lifegraph.core.repository_protocols import BoardRepository
from lifegraph.infrastructure import database
from lifegraph.infrastructure.memory_board_repository import InMemoryBoardRepository
from lifegraph.infrastructure.sql_board_repository import SqlBoardRepository

logger = logging.getLogger(__name__)

# Singleton (initialized on startup)
board_repository: BoardRepository | None = None


async def init_storage(settings: Settings) -> BoardRepository:
    """Create the repository selected by settings.storage_backend."""
    if settings.storage_backend == StorageBackend.MEMORY:
        repository: BoardRepository = InMemoryBoardRepository()
    else:
        manager = database.init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_schema:
            await manager.create_schema()
        repository = SqlBoardRepository(manager)
    set_board_repository(repository)
    logger.info(f"Storage initialized with {settings.storage_backend.value} backend")
    return repository


async def close_storage() -> None:
    global board_repository
    board_repository = None
    if database.db_manager:
        await database.db_manager.dispose()
        database.db_manager = None


def set_board_repository(repository: BoardRepository | None) -> None:
    global board_repository
    board_repository = repository


def get_board_repository() -> BoardRepository:
    """FastAPI dependency for the board repository."""
    if board_repository is None:
        raise RuntimeError("Storage not initialized")
    return board_repository
