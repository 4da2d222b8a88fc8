"""Health & Readiness - liveness plus a group-store readiness check.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 until the lifespan has built the group store

Design Decisions:
    - Readiness asks the registry directly instead of Depends(get_group_store):
      an unbuilt store must answer 503, not the generic 500 envelope
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from knowledge_base.infrastructure.store import get_group_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness. Returns 200 while the process is up."""
    return {"status": "healthy", "service": "knowledge-base-groups"}


@router.get("/ready")
async def readiness_check():
    """Readiness: the group store exists and reports its active pointer."""
    try:
        store = get_group_store()
    except RuntimeError:
        logger.warning("Readiness check before group store init")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "group_store_uninitialized"},
        )
    return {
        "status": "ready",
        "groups": len(store.list_groups()),
        "active_pointer": store.active_pointer.value,
    }
