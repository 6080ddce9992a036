"""WebSocket message schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from civicalert.schemas.incident import Incident, IncidentType


class Viewport(BaseModel):
    """Geographic viewport bounds for filtering updates."""

    min_lat: float = Field(..., ge=-90, le=90)
    max_lat: float = Field(..., ge=-90, le=90)
    min_lng: float = Field(..., ge=-180, le=180)
    max_lng: float = Field(..., ge=-180, le=180)

    def contains(self, lat: float, lng: float) -> bool:
        """Check if coordinates are within this viewport."""
        return (
            self.min_lat <= lat <= self.max_lat
            and self.min_lng <= lng <= self.max_lng
        )


class SubscribeMessage(BaseModel):
    """Client subscription message to set viewport and incident type filters."""

    type: Literal["subscribe"] = "subscribe"
    viewport: Viewport | None = None
    types: list[IncidentType] | None = None


class IncidentUpdateMessage(BaseModel):
    """Server message with created or updated incidents."""

    type: Literal["incident_update"] = "incident_update"
    data: list[Incident]
    timestamp: datetime


class PingMessage(BaseModel):
    """Ping message for keep-alive."""

    type: Literal["ping"] = "ping"


class PongMessage(BaseModel):
    """Pong response for keep-alive."""

    type: Literal["pong"] = "pong"


class ErrorMessage(BaseModel):
    """Error message from server."""

    type: Literal["error"] = "error"
    message: str
