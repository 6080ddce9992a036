"""Pydantic schemas for dashboard statistics."""

from datetime import date

from pydantic import BaseModel

from civicalert.schemas.incident import IncidentType, SeverityLevel


class TrendPoint(BaseModel):
    """Number of incidents created on one calendar day."""

    day: date
    date: str  # Display label, e.g. "Sun, Oct 18"
    count: int


class DashboardStats(BaseModel):
    """Summary counts for the admin dashboard."""

    total_incidents: int
    active_incidents: int
    high_severity_alerts: int
    resolved_incidents: int
    incidents_by_type: dict[IncidentType, int]
    severity_distribution: dict[SeverityLevel, int]
    incidents_trend: list[TrendPoint]
