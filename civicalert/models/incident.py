"""IncidentRecord model for citizen-reported incidents."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from civicalert.database import Base


class IncidentRecord(Base):
    """
    Incident submitted through the public report form.

    ``seq`` is an internal surrogate key that preserves insertion order;
    ``id`` is the public ``INC-000001`` identifier.
    """

    __tablename__ = "incidents"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)

    # Classification
    type: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    severity: Mapped[str] = mapped_column(String(20), index=True, nullable=False)

    # Location
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    # Ranking
    confirmations: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    priority_score: Mapped[float] = mapped_column(Float, nullable=False)

    # Triage
    reporter_name: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_false_report: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_incidents_priority", "priority_score"),
    )

    def __repr__(self) -> str:
        return f"<IncidentRecord {self.id}: {self.type}/{self.status}>"
