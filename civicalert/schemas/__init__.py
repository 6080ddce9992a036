"""Pydantic schemas for API request/response validation."""

from civicalert.schemas.auth import LoginRequest, Token, User
from civicalert.schemas.incident import (
    Incident,
    IncidentCreate,
    IncidentFilter,
    IncidentStatus,
    IncidentType,
    SeverityLevel,
)
from civicalert.schemas.stats import DashboardStats, TrendPoint

__all__ = [
    "DashboardStats",
    "Incident",
    "IncidentCreate",
    "IncidentFilter",
    "IncidentStatus",
    "IncidentType",
    "LoginRequest",
    "SeverityLevel",
    "Token",
    "TrendPoint",
    "User",
]
