"""Health and readiness endpoints."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from civicalert.config import get_settings
from civicalert.services.incidents import IncidentService, get_incident_service
from civicalert.websocket.manager import manager as ws_manager

router = APIRouter(tags=["health"])


class StoreStatus(BaseModel):
    """Status of the incident store."""

    backend: str
    record_count: int
    newest_record: datetime | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    incidents: StoreStatus
    feed_connections: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: Annotated[IncidentService, Depends(get_incident_service)],
) -> HealthResponse:
    """
    Health check endpoint with store status.

    Returns the record count and newest report time of the incident store.
    """
    incidents = await service.repository.list_all()
    newest = max((i.created_at for i in incidents), default=None)

    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        incidents=StoreStatus(
            backend=get_settings().incident_store,
            record_count=len(incidents),
            newest_record=newest,
        ),
        feed_connections=ws_manager.connection_count,
    )


@router.get("/ready")
async def readiness_check() -> dict:
    """Simple readiness probe for container orchestration."""
    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> dict:
    """Simple liveness probe for container orchestration."""
    return {"status": "alive"}
