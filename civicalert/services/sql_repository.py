"""SQLAlchemy-backed incident repository."""

import logging
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicalert.models import IncidentRecord
from civicalert.schemas.incident import Incident
from civicalert.services.repository import IncidentRepository

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back out.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_incident(record: IncidentRecord) -> Incident:
    incident = Incident.model_validate(record)
    incident.created_at = _as_utc(incident.created_at)
    incident.updated_at = _as_utc(incident.updated_at)
    incident.notes = list(record.notes or [])
    return incident


def _apply(record: IncidentRecord, incident: Incident) -> None:
    """Copy mutable incident fields onto an ORM row."""
    record.status = incident.status.value
    record.severity = incident.severity.value
    record.confirmations = incident.confirmations
    record.priority_score = incident.priority_score
    record.notes = list(incident.notes)
    record.is_false_report = incident.is_false_report
    record.updated_at = incident.updated_at


class SqlIncidentRepository(IncidentRepository):
    """
    Incident repository over the ``incidents`` table.

    Each call runs in its own session and commits before returning.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def add(self, incident: Incident) -> None:
        record = IncidentRecord(
            id=incident.id,
            type=incident.type.value,
            description=incident.description,
            latitude=incident.latitude,
            longitude=incident.longitude,
            reporter_name=incident.reporter_name,
            created_at=incident.created_at,
        )
        _apply(record, incident)
        async with self.session_maker() as db:
            db.add(record)
            await db.commit()
        logger.debug(f"Inserted incident {incident.id}")

    async def get(self, incident_id: str) -> Incident | None:
        async with self.session_maker() as db:
            result = await db.execute(
                select(IncidentRecord).where(IncidentRecord.id == incident_id)
            )
            record = result.scalar_one_or_none()
            return _to_incident(record) if record else None

    async def save(self, incident: Incident) -> None:
        async with self.session_maker() as db:
            result = await db.execute(
                select(IncidentRecord).where(IncidentRecord.id == incident.id)
            )
            record = result.scalar_one_or_none()
            if record is None:
                raise KeyError(incident.id)
            _apply(record, incident)
            await db.commit()

    async def list_all(self) -> list[Incident]:
        async with self.session_maker() as db:
            result = await db.execute(
                select(IncidentRecord).order_by(IncidentRecord.seq.desc())
            )
            return [_to_incident(record) for record in result.scalars().all()]

    async def count(self) -> int:
        async with self.session_maker() as db:
            result = await db.execute(select(func.count(IncidentRecord.seq)))
            return result.scalar() or 0
