# =============================================================================
# app/routers/health.py - Status and Stats Endpoints
# =============================================================================
# Provides collaborator liveness and document counts for monitoring.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel

from app.dependencies import ServicesDep

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class StatusResponse(BaseModel):
    """Liveness of each collaborator."""
    redis: bool
    db: bool


class StatsResponse(BaseModel):
    """Document counts."""
    users: int
    files: int


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/status", response_model=StatusResponse)
def get_status(services: ServicesDep):
    """
    Status endpoint.

    Reports whether Redis and the metadata store answer. Always 200;
    a dead collaborator shows up as false.
    """
    return StatusResponse(
        redis=services.status_checks["redis"](),
        db=services.status_checks["db"](),
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(services: ServicesDep):
    """
    Stats endpoint.

    Returns the number of users and of file/folder records.
    """
    return StatsResponse(
        users=services.users.count(),
        files=services.files.files.count(),
    )
