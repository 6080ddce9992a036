"""Incident service: creation, triage mutations, and read models."""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import Request

from civicalert.schemas.incident import (
    Incident,
    IncidentFilter,
    IncidentStatus,
    IncidentType,
    SeverityLevel,
)
from civicalert.schemas.stats import DashboardStats
from civicalert.services import lifecycle
from civicalert.services.query import filter_incidents
from civicalert.services.repository import IncidentRepository
from civicalert.services.scoring import calculate_priority_score
from civicalert.services.stats import compute_dashboard_stats

logger = logging.getLogger(__name__)

ChangeListener = Callable[[list[Incident]], Awaitable[None]]


class IncidentNotFoundError(Exception):
    """Raised when an operation references an unknown incident id."""

    def __init__(self, incident_id: str):
        super().__init__(f"Incident not found: {incident_id}")
        self.incident_id = incident_id


class IncidentLockedError(Exception):
    """Raised when changing status or severity of a false report."""

    def __init__(self, incident_id: str):
        super().__init__(f"Incident {incident_id} is marked as a false report")
        self.incident_id = incident_id


def format_incident_id(sequence: int) -> str:
    return f"INC-{sequence:06d}"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class IncidentService:
    """
    Applies the incident lifecycle on top of an ``IncidentRepository``.

    Mutations on the same incident are serialized with a per-id lock, and
    each one is applied to a copy that is saved in a single call, so a
    failure never leaves a half-updated record behind. The priority score
    is recomputed on every mutation.
    """

    def __init__(
        self,
        repository: IncidentRepository,
        clock: Callable[[], datetime] = _utcnow,
        listener: ChangeListener | None = None,
    ):
        self.repository = repository
        self.clock = clock
        self.listener = listener
        # Lock entries live only while a mutation holds or awaits them.
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_waiters: dict[str, int] = {}
        self._create_lock = asyncio.Lock()
        self._notifications: set[asyncio.Task] = set()

    @asynccontextmanager
    async def _incident_lock(self, incident_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(incident_id, asyncio.Lock())
        self._lock_waiters[incident_id] = self._lock_waiters.get(incident_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_waiters[incident_id] -= 1
            if not self._lock_waiters[incident_id]:
                del self._lock_waiters[incident_id]
                del self._locks[incident_id]

    async def _publish(self, incident: Incident) -> None:
        try:
            await self.listener([incident])
        except Exception as e:
            # Feed delivery must not fail the mutation that already committed.
            logger.warning(f"Failed to publish update for {incident.id}: {e}")

    def _notify(self, incident: Incident) -> None:
        """Publish to the listener in the background."""
        if self.listener is None:
            return
        task = asyncio.create_task(self._publish(incident))
        self._notifications.add(task)
        task.add_done_callback(self._notifications.discard)

    async def drain_notifications(self) -> None:
        """Wait for in-flight feed notifications to finish."""
        while self._notifications:
            await asyncio.gather(*self._notifications)

    async def _mutate(
        self,
        incident_id: str,
        change: Callable[[Incident, datetime], bool],
    ) -> Incident:
        """
        Read-modify-write one incident under its lock.

        ``change`` edits the copy in place and returns False to signal that
        nothing changed, in which case the record is returned untouched.
        """
        async with self._incident_lock(incident_id):
            current = await self.repository.get(incident_id)
            if current is None:
                raise IncidentNotFoundError(incident_id)

            updated = current.model_copy(deep=True)
            now = self.clock()
            if not change(updated, now):
                return current

            updated.priority_score = calculate_priority_score(
                updated.type, updated.severity, updated.confirmations
            )
            updated.updated_at = now
            await self.repository.save(updated)

        self._notify(updated)
        return updated

    async def create(
        self,
        incident_type: IncidentType,
        description: str,
        latitude: float,
        longitude: float,
        reporter_name: str | None = None,
    ) -> Incident:
        """Record a new citizen report as unverified, medium severity."""
        async with self._create_lock:
            sequence = await self.repository.count() + 1
            now = self.clock()
            incident = Incident(
                id=format_incident_id(sequence),
                type=incident_type,
                description=description,
                latitude=latitude,
                longitude=longitude,
                status=IncidentStatus.UNVERIFIED,
                severity=SeverityLevel.MEDIUM,
                confirmations=1,
                priority_score=calculate_priority_score(
                    incident_type, SeverityLevel.MEDIUM, 1
                ),
                created_at=now,
                updated_at=now,
                reporter_name=reporter_name,
            )
            await self.repository.add(incident)

        logger.info(f"Created incident {incident.id} ({incident.type.value})")
        self._notify(incident)
        return incident

    async def confirm(self, incident_id: str) -> Incident:
        """Add one citizen confirmation, auto-verifying at the threshold."""

        def change(incident: Incident, now: datetime) -> bool:
            if lifecycle.apply_confirmation(incident):
                logger.info(
                    f"Incident {incident_id} auto-verified after "
                    f"{incident.confirmations} confirmations"
                )
            return True

        return await self._mutate(incident_id, change)

    async def update_status(self, incident_id: str, status: IncidentStatus) -> Incident:
        """Set any status; only false reports refuse the change."""

        def change(incident: Incident, now: datetime) -> bool:
            if lifecycle.is_locked(incident):
                raise IncidentLockedError(incident_id)
            incident.status = status
            return True

        incident = await self._mutate(incident_id, change)
        logger.info(f"Incident {incident_id} status set to {status.value}")
        return incident

    async def update_severity(self, incident_id: str, severity: SeverityLevel) -> Incident:
        def change(incident: Incident, now: datetime) -> bool:
            if lifecycle.is_locked(incident):
                raise IncidentLockedError(incident_id)
            incident.severity = severity
            return True

        incident = await self._mutate(incident_id, change)
        logger.info(f"Incident {incident_id} severity set to {severity.value}")
        return incident

    async def add_note(self, incident_id: str, text: str) -> Incident:
        """Append a timestamped staff note."""

        def change(incident: Incident, now: datetime) -> bool:
            incident.notes.append(f"[{now.isoformat(timespec='seconds')}] {text}")
            return True

        return await self._mutate(incident_id, change)

    async def mark_false_report(self, incident_id: str) -> Incident:
        """Flag as a false report and resolve. Repeating the call is a no-op."""

        def change(incident: Incident, now: datetime) -> bool:
            if incident.is_false_report:
                return False
            lifecycle.apply_false_report(incident)
            return True

        incident = await self._mutate(incident_id, change)
        logger.info(f"Incident {incident_id} marked as false report")
        return incident

    async def get(self, incident_id: str) -> Incident | None:
        return await self.repository.get(incident_id)

    async def list_incidents(self, filters: IncidentFilter | None = None) -> list[Incident]:
        return filter_incidents(await self.repository.list_all(), filters)

    async def stats(self) -> DashboardStats:
        incidents = await self.repository.list_all()
        return compute_dashboard_stats(incidents, today=self.clock().astimezone(UTC).date())


def get_incident_service(request: Request) -> IncidentService:
    """Dependency returning the service built during application startup."""
    return request.app.state.incident_service
