"""Health Checks — liveness never touches the DB, readiness does."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from songquiz.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE = {"service": "songquiz-api", "version": "1.0.0"}


@router.get("/")
async def liveness():
    return {"status": "healthy", **SERVICE}


@router.get("/ready")
async def readiness():
    # Looked up per call: the lifespan (or a test) replaces db_manager
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": {"database": "unavailable"}},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
