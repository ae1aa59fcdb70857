"""Health & Liveness Probes — storage health and process liveness endpoints.

Invariants:
    - GET /health returns 503 when the storage backend is unreachable
    - GET /health/live always returns 200 if the process is up

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      the load balancer
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from lifegraph.core.repository_protocols import BoardRepository
from lifegraph.infrastructure.storage import get_board_repository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(
    repository: BoardRepository = Depends(get_board_repository),
):
    """Readiness probe — includes storage connectivity."""
    if not await repository.health_check():
        logger.warning("Storage health check failed")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "Unhealthy",
                "database": "Disconnected",
                "detail": "Database connection failed",
            },
        )
    return {"status": "Healthy", "database": "Connected"}


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "alive", "service": "lifegraph-api", "version": "1.0.0"}
