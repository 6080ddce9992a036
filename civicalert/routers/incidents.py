"""API routes for citizen incident reports and staff triage."""

import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from civicalert.rate_limit import PUBLIC_WRITE_LIMIT, limiter
from civicalert.routers.auth import require_staff
from civicalert.schemas.auth import User
from civicalert.schemas.incident import (
    Incident,
    IncidentCreate,
    IncidentFilter,
    IncidentStatus,
    IncidentType,
    NoteCreate,
    SeverityLevel,
    SeverityUpdate,
    StatusUpdate,
)
from civicalert.services.incidents import IncidentService, get_incident_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/incidents", tags=["incidents"])

Service = Annotated[IncidentService, Depends(get_incident_service)]
Staff = Annotated[User, Depends(require_staff)]


@router.get("", response_model=list[Incident])
async def list_incidents(
    service: Service,
    type: IncidentType | None = Query(None, description="Filter by incident type"),
    status: IncidentStatus | None = Query(None, description="Filter by status"),
    severity: SeverityLevel | None = Query(None, description="Filter by severity"),
    start_date: date | None = Query(None, description="Only incidents created on or after this day"),
    end_date: date | None = Query(None, description="Only incidents created on or before this day"),
    q: str | None = Query(None, description="Search term (incident id or description)"),
) -> list[Incident]:
    """
    List incidents, highest priority first.

    Serves both the public feed and the staff incident table.
    """
    filters = IncidentFilter(
        type=type,
        status=status,
        severity=severity,
        start_date=start_date,
        end_date=end_date,
        search=q,
    )
    return await service.list_incidents(filters)


@router.post("", response_model=Incident, status_code=201)
@limiter.limit(PUBLIC_WRITE_LIMIT)
async def create_incident(
    request: Request,
    report: IncidentCreate,
    service: Service,
) -> Incident:
    """Submit a new incident from the public report form."""
    return await service.create(
        incident_type=report.type,
        description=report.description,
        latitude=report.latitude,
        longitude=report.longitude,
        reporter_name=report.reporter_name,
    )


@router.get("/{incident_id}", response_model=Incident)
async def get_incident(incident_id: str, service: Service) -> Incident:
    """Get a specific incident by ID."""
    incident = await service.get(incident_id)
    if incident is None:
        raise HTTPException(status_code=404, detail="Incident not found")
    return incident


@router.post("/{incident_id}/confirm", response_model=Incident)
@limiter.limit(PUBLIC_WRITE_LIMIT)
async def confirm_incident(
    request: Request,
    incident_id: str,
    service: Service,
) -> Incident:
    """Corroborate an incident. Three confirmations verify it."""
    return await service.confirm(incident_id)


@router.patch("/{incident_id}/status", response_model=Incident)
async def set_status(
    incident_id: str,
    update: StatusUpdate,
    service: Service,
    user: Staff,
) -> Incident:
    logger.info(f"{user.username} setting {incident_id} status to {update.status.value}")
    return await service.update_status(incident_id, update.status)


@router.patch("/{incident_id}/severity", response_model=Incident)
async def set_severity(
    incident_id: str,
    update: SeverityUpdate,
    service: Service,
    user: Staff,
) -> Incident:
    logger.info(f"{user.username} setting {incident_id} severity to {update.severity.value}")
    return await service.update_severity(incident_id, update.severity)


@router.post("/{incident_id}/notes", response_model=Incident)
async def add_note(
    incident_id: str,
    note: NoteCreate,
    service: Service,
    user: Staff,
) -> Incident:
    """Append a timestamped triage note."""
    return await service.add_note(incident_id, note.text)


@router.post("/{incident_id}/false-report", response_model=Incident)
async def mark_false_report(
    incident_id: str,
    service: Service,
    user: Staff,
) -> Incident:
    """Flag an incident as a false report; this also resolves it."""
    logger.info(f"{user.username} marking {incident_id} as false report")
    return await service.mark_false_report(incident_id)
