"""Database models."""

from civicalert.models.incident import IncidentRecord

__all__ = ["IncidentRecord"]
