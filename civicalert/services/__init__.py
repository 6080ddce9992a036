"""Services implementing incident scoring, lifecycle and storage."""

from civicalert.services.incidents import (
    IncidentLockedError,
    IncidentNotFoundError,
    IncidentService,
)
from civicalert.services.repository import IncidentRepository, InMemoryIncidentRepository

__all__ = [
    "IncidentLockedError",
    "IncidentNotFoundError",
    "IncidentRepository",
    "IncidentService",
    "InMemoryIncidentRepository",
]
