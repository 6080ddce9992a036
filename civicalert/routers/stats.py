"""Dashboard statistics endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from civicalert.routers.auth import require_staff
from civicalert.schemas.auth import User
from civicalert.schemas.stats import DashboardStats
from civicalert.services.incidents import IncidentService, get_incident_service

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=DashboardStats)
async def get_stats(
    service: Annotated[IncidentService, Depends(get_incident_service)],
    user: Annotated[User, Depends(require_staff)],
) -> DashboardStats:
    """
    Summary counts for the admin dashboard.

    Computed from the full incident collection on every request.
    """
    return await service.stats()
