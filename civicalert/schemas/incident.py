"""Pydantic schemas for citizen-reported incidents."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class IncidentType(str, Enum):
    ACCIDENT = "accident"
    MEDICAL = "medical"
    FIRE = "fire"
    INFRASTRUCTURE = "infrastructure"
    SAFETY = "safety"


class IncidentStatus(str, Enum):
    UNVERIFIED = "unverified"
    VERIFIED = "verified"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


class SeverityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Incident(BaseModel):
    """Incident record as stored and returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    type: IncidentType
    description: str
    latitude: float
    longitude: float

    status: IncidentStatus = IncidentStatus.UNVERIFIED
    severity: SeverityLevel = SeverityLevel.MEDIUM
    confirmations: int = 1
    priority_score: float

    created_at: datetime
    updated_at: datetime

    reporter_name: str | None = None
    notes: list[str] = Field(default_factory=list)
    is_false_report: bool = False


class IncidentCreate(BaseModel):
    """Citizen submission from the public report form."""

    type: IncidentType
    description: str = Field(..., min_length=10, max_length=500)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    reporter_name: str | None = Field(None, max_length=100)


class StatusUpdate(BaseModel):
    status: IncidentStatus


class SeverityUpdate(BaseModel):
    severity: SeverityLevel


class NoteCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=1000)


class IncidentFilter(BaseModel):
    """Filters for listing incidents.

    Structured filters are exact matches; ``start_date``/``end_date`` bound
    the UTC calendar day of ``created_at`` inclusively. ``search`` is a
    case-insensitive substring match over id and description.
    """

    type: IncidentType | None = None
    status: IncidentStatus | None = None
    severity: SeverityLevel | None = None
    start_date: date | None = None
    end_date: date | None = None
    search: str | None = None
