"""Incident storage abstraction and the in-memory implementation."""

from abc import ABC, abstractmethod

from civicalert.schemas.incident import Incident


class IncidentRepository(ABC):
    """
    Storage for incident records.

    Implementations hand out copies: mutating a returned record has no
    effect until it is passed back to ``save``.
    """

    @abstractmethod
    async def add(self, incident: Incident) -> None:
        """Insert a new incident. Its id must not exist yet."""

    @abstractmethod
    async def get(self, incident_id: str) -> Incident | None:
        """Return the incident with ``incident_id``, or None."""

    @abstractmethod
    async def save(self, incident: Incident) -> None:
        """Replace the stored copy of an existing incident."""

    @abstractmethod
    async def list_all(self) -> list[Incident]:
        """Return every incident, most recently inserted first."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored incidents."""


class InMemoryIncidentRepository(IncidentRepository):
    """Process-memory store used for development and tests."""

    def __init__(self, incidents: list[Incident] | None = None):
        self._incidents: dict[str, Incident] = {}
        for incident in incidents or []:
            self._incidents[incident.id] = incident.model_copy(deep=True)

    async def add(self, incident: Incident) -> None:
        if incident.id in self._incidents:
            raise ValueError(f"Incident {incident.id} already exists")
        self._incidents[incident.id] = incident.model_copy(deep=True)

    async def get(self, incident_id: str) -> Incident | None:
        incident = self._incidents.get(incident_id)
        return incident.model_copy(deep=True) if incident else None

    async def save(self, incident: Incident) -> None:
        if incident.id not in self._incidents:
            raise KeyError(incident.id)
        self._incidents[incident.id] = incident.model_copy(deep=True)

    async def list_all(self) -> list[Incident]:
        return [i.model_copy(deep=True) for i in reversed(self._incidents.values())]

    async def count(self) -> int:
        return len(self._incidents)
